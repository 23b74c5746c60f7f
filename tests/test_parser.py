import json

import pytest

from heftsched.errors import GraphError
import heftsched.config as config
import heftsched.workflows as wfs


def write_trace(tmp_path, jobs, name="trace"):
    filename = tmp_path / f"{name}.json"
    filename.write_text(json.dumps({
        "name": name,
        "description": "test trace",
        "workflow": {"jobs": jobs},
    }))
    return str(filename)


def test_parse_resources_trace():
    workflow = wfs.PegasusTraceParser(
        filename=config.WORKFLOW_TRACE,
    ).get_workflow()

    assert workflow.name == "diamond"
    assert len(workflow) == 4
    assert [n.id for n in workflow.leaves()] == ["analyze_ID0000004"]

    task = workflow.get_node("findrange_ID0000002").task
    assert task.transformation == ("diamond", "findrange", "4.0")
    assert task.fqdn == "diamond::findrange:4.0"


def test_defaults_for_transformation(tmp_path):
    filename = write_trace(tmp_path, [
        {"name": "split", "type": "compute", "parents": []},
        {"name": "merge", "category": "merge", "version": 2, "parents": ["split"]},
    ])

    workflow = wfs.PegasusTraceParser(filename=filename).get_workflow()

    assert workflow.get_node("split").task.transformation == (
        "pegasus", "split", "1.0")
    assert workflow.get_node("merge").task.transformation == (
        "pegasus", "merge", "2")
    assert [n.id for n in workflow.get_node("merge").parents] == ["split"]


def test_job_type_is_not_a_transformation(tmp_path):
    filename = write_trace(tmp_path, [
        {"name": "blast_1", "category": "blast", "type": "compute",
         "parents": []},
        {"name": "stage_in", "type": "auxiliary", "parents": ["blast_1"]},
    ])

    workflow = wfs.PegasusTraceParser(filename=filename).get_workflow()

    assert workflow.get_node("blast_1").task.name == "blast"
    assert workflow.get_node("stage_in").task.name == "stage_in"


def test_parse_loaded_data():
    workflow = wfs.PegasusTraceParser(data={
        "name": "inline",
        "workflow": {"jobs": [{"name": "a", "parents": []}]},
    }).get_workflow()

    assert workflow.name == "inline"
    assert "a" in workflow


def test_child_before_parent_raises(tmp_path):
    filename = write_trace(tmp_path, [
        {"name": "merge", "parents": ["split"]},
        {"name": "split", "parents": []},
    ])

    with pytest.raises(SyntaxError):
        wfs.PegasusTraceParser(filename=filename)


def test_cycle_raises(tmp_path):
    filename = write_trace(tmp_path, [
        {"name": "a", "parents": ["a"]},
    ])

    with pytest.raises(GraphError):
        wfs.PegasusTraceParser(filename=filename)

import json

import pytest

from heftsched.errors import RuntimeUnavailable
import heftsched.catalogs as cts


def test_site_list_follows_configured_order(catalog_factory, task_factory):
    catalog = catalog_factory({"t": {"x": 10, "y": 20}})
    task = task_factory("t")

    assert catalog.get_site_list(task, ["y", "x", "z"]) == ["y", "x"]
    assert catalog.get_site_list(task, ["z"]) == []
    assert catalog.get_site_list(task_factory("other"), ["x"]) == []


def test_runtime_is_taken_from_first_entry(task_factory):
    catalog = cts.TransformationCatalog(entries=[
        cts.TransformationEntry("test", "t", "1.0", "x", {"runtime": "10"}),
        cts.TransformationEntry("test", "t", "1.0", "x", {"runtime": "99"}),
    ])

    assert catalog.get_runtime(task_factory("t"), "x") == 10


@pytest.mark.parametrize("profiles", [
    {},
    {"runtime": "0"},
    {"runtime": "-5"},
    {"runtime": "fast"},
    {"runtime": None},
])
def test_invalid_runtime_raises(task_factory, profiles):
    catalog = cts.TransformationCatalog(entries=[
        cts.TransformationEntry("test", "t", "1.0", "x", profiles),
    ])

    with pytest.raises(RuntimeUnavailable):
        catalog.get_runtime(task_factory("t"), "x")


def test_runtime_on_site_without_entry_raises(catalog_factory, task_factory):
    catalog = catalog_factory({"t": {"x": 10}})

    with pytest.raises(RuntimeUnavailable):
        catalog.get_runtime(task_factory("t"), "y")


def test_transformation_catalog_from_json(tmp_path, task_factory):
    filename = tmp_path / "tc.json"
    filename.write_text(json.dumps({"transformations": [
        {"namespace": "test", "name": "t", "version": 1.0,
         "site": "x", "profiles": {"runtime": 15}},
    ]}))

    catalog = cts.TransformationCatalog.from_json(str(filename))

    assert catalog.get_runtime(task_factory("t"), "x") == 15


def test_site_catalog_capacity(site_catalog_factory):
    catalog = site_catalog_factory({"x": 4, "bad": "many", "zero": 0})

    assert catalog.get_capacity("x") == 4
    assert catalog.get_capacity("bad") == 10
    assert catalog.get_capacity("zero") == 10
    assert catalog.get_capacity("missing") == 10


def test_site_catalog_without_vanilla_manager():
    catalog = cts.SiteCatalog(sites={
        "x": {"handle": "x", "jobmanagers": [
            {"universe": "transfer", "idle-nodes": "3"},
        ]},
    }, default_capacity=7)

    assert catalog.get_capacity("x") == 7


def test_site_catalog_from_json(tmp_path):
    filename = tmp_path / "sites.json"
    filename.write_text(json.dumps({"sites": [
        {"handle": "x", "jobmanagers": [
            {"universe": "vanilla", "idle-nodes": "6"},
        ]},
    ]}))

    catalog = cts.SiteCatalog.from_json(str(filename))

    assert catalog.get_capacity("x") == 6

import json
import typing as tp

from heftsched.errors import GraphError
import heftsched.workflows as wfs


DEFAULT_NAMESPACE = "pegasus"
DEFAULT_VERSION = "1.0"


class PegasusTraceParser:
    """Parser for Pegasus traces.
    Example trace: https://github.com/wfcommons/pegasus-traces/blob/master/1000genome/chameleon-cloud/1000genome-chameleon-10ch-100k-001.json

    Works with traces from wfcommons. Their trace format can be found
    here: https://github.com/wfcommons/workflow-schema/blob/master/wfcommons-schema.json
    """

    def __init__(
            self,
            filename: tp.Optional[str] = None,
            data: tp.Optional[dict[str, tp.Any]] = None,
    ) -> None:
        """Accept json file with a trace (or already loaded trace) and
        parse it into a WorkflowGraph instance.

        :param filename: json file with a trace.
        :param data: content of a trace.
        """

        assert filename is not None or data is not None

        self.filename = filename

        if data is None:
            with open(filename) as f:
                data = json.load(f)

        self._data = data
        self._parse()

    def _parse(self) -> None:
        self.workflow: wfs.WorkflowGraph = wfs.WorkflowGraph(
            name=self._data.get("name", ""),
        )

        workflow_json = self._data["workflow"]

        # WARNING: works only in assumption that in trace file each task
        #   is listed only after all its predecessors (if exists).
        for task_json in workflow_json["jobs"]:
            task = wfs.Task(
                id=task_json["name"],
                namespace=task_json.get("namespace", DEFAULT_NAMESPACE),
                name=task_json.get("category", task_json["name"]),
                version=str(task_json.get("version", DEFAULT_VERSION)),
            )
            self.workflow.add_task(task=task)

            for parent_name in task_json.get("parents", []):
                if parent_name not in self.workflow:
                    raise SyntaxError("Bad file structure. "
                                      "Child task is before its parent")

                self.workflow.add_edge(parent_name, task.id)

        if not self.workflow.is_acyclic():
            raise GraphError(f"Workflow {self.workflow.name} has a cycle")

    def get_workflow(self) -> wfs.WorkflowGraph:
        return self.workflow

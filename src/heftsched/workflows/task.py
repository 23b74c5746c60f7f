from dataclasses import dataclass
import typing as tp


@dataclass(frozen=True)
class Task:
    """Representation of a task entity. Identity is immutable; all
    scheduling results are kept in the annotation of the graph node
    that wraps the task.
    """

    # Task ID in workflow. Unique within a graph.
    id: str

    # Reference to the transformation that is executed by task. Used
    # for looking up sites and runtimes in transformation catalog.
    namespace: str
    name: str
    version: str

    @property
    def transformation(self) -> tp.Tuple[str, str, str]:
        return self.namespace, self.name, self.version

    @property
    def fqdn(self) -> str:
        return f"{self.namespace}::{self.name}:{self.version}"

    def __str__(self) -> str:
        return (f"<Task "
                f"id = {self.id}, "
                f"transformation = {self.fqdn}>")

from dataclasses import dataclass
import typing as tp

import heftsched.workflows as wfs


@dataclass
class Annotation:
    """Values computed for a node during a scheduling run."""

    # Capacity weighted mean runtime across feasible sites.
    # Measures in seconds.
    avg_compute_time: float = 0.0
    downward_rank: float = 0.0

    # Site chosen for task, with start and finish time on it.
    # Either all three are set or none of them.
    scheduled_site: tp.Optional[str] = None
    actual_start: tp.Optional[int] = None  # in seconds
    actual_finish: tp.Optional[int] = None  # in seconds

    def is_scheduled(self) -> bool:
        return self.actual_finish is not None


class Node:
    """Wraps a Task inside the workflow graph."""

    def __init__(self, task: wfs.Task) -> None:
        self.task = task

        # Adjacency is maintained by the graph, never set directly.
        self.parents: list[Node] = []
        self.children: list[Node] = []

        self.annotation: Annotation = Annotation()

    @property
    def id(self) -> str:
        return self.task.id

    def __str__(self) -> str:
        return (f"<Node "
                f"id = {self.id}, "
                f"task = {self.task}, "
                f"annotation = {self.annotation}>")

    def __repr__(self) -> str:
        return f"Node(task = {self.task!r})"

    def assign(
            self,
            site: tp.Optional[str],
            start: int,
            finish: int,
    ) -> None:
        """Record the placement of node. Start, finish and site are
        always written together.

        :param site: site where task is executed.
        :param start: start time on site (in seconds).
        :param finish: finish time on site (in seconds).
        :return: None.
        """

        assert 0 <= start <= finish

        self.annotation.scheduled_site = site
        self.annotation.actual_start = start
        self.annotation.actual_finish = finish

    def reset(self) -> None:
        """Drop all values of previous scheduling run.

        :return: None.
        """

        self.annotation = Annotation()

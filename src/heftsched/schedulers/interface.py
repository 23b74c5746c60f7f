from abc import ABC, abstractmethod
import typing as tp

import heftsched.metric_collector as mc
import heftsched.workflows as wfs


class SchedulerInterface(ABC):
    """Interface for implementing static site selection algorithms."""

    def __init__(self) -> None:
        # Collector for metrics. Should be set by user.
        self.collector: tp.Optional[mc.MetricCollector] = None

        self.name = ""

    def set_metric_collector(self, collector: mc.MetricCollector) -> None:
        self.collector = collector
        self.collector.scheduler_name = self.name

    @abstractmethod
    def schedule(self, workflow: wfs.WorkflowGraph) -> wfs.WorkflowGraph:
        """Map every task of workflow to a site. Results are written to
        annotations of graph nodes.

        :param workflow: workflow to schedule.
        :return: the same workflow, annotated.
        """

        pass

    @abstractmethod
    def makespan(self) -> int:
        """Return makespan of last scheduled workflow.

        :return: makespan in seconds.
        """

        pass

    @abstractmethod
    def description(self) -> str:
        """Return a string describing the site selection technique.

        :return: description.
        """

        pass

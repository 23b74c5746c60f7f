from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
import enum
from math import inf
import typing as tp

from loguru import logger

from heftsched.errors import UnscheduledLeafError
import heftsched.catalogs as cts
import heftsched.config as config
import heftsched.sites as sts
import heftsched.workflows as wfs

from ..interface import SchedulerInterface
from .rank import RankAnnotator


ROOT_ID = "__heft_root__"

ScheduleEvent = namedtuple("ScheduleEvent", "task start end")
Estimate = namedtuple("Estimate", "site start finish")


@dataclass
class Settings:
    # The average bandwidth between the sites.
    # Measures in megabytes per second.
    average_bandwidth: float = config.AVERAGE_BANDWIDTH

    # The average data that is transferred in between 2 jobs.
    # Measures in megabytes.
    average_data_size: float = config.AVERAGE_DATA_SIZE_BETWEEN_JOBS

    # Number of threads for evaluating candidate sites of a task.
    # 1 means evaluation on scheduler thread.
    workers: int = 1

    @property
    def average_communication_cost(self) -> float:
        # Ratio is bandwidth over size, not size over bandwidth.
        return self.average_bandwidth / self.average_data_size


class State(enum.Enum):
    UNRANKED = enum.auto()
    RANKED = enum.auto()
    ORDERED = enum.auto()
    SCHEDULING = enum.auto()
    FINALIZED = enum.auto()


class HeftScheduler(SchedulerInterface):
    """The HEFT based site selector. Tasks are ordered by ascending
    downward rank and each task is greedily mapped to the site that
    minimizes its estimated finish time.
    """

    def __init__(
            self,
            sites: list[str],
            site_lookup: cts.FeasibleSiteLookup,
            runtime_lookup: cts.RuntimeLookup,
            capacity_provider: cts.SiteCapacityProvider,
            settings: tp.Optional[Settings] = None,
    ) -> None:
        super().__init__()

        # Sites where the workflow can run. Order matters for ties.
        self.sites = list(sites)

        self.site_lookup = site_lookup
        self.runtime_lookup = runtime_lookup
        self.capacity_provider = capacity_provider

        # Settings of scheduler. Slightly control its behaviour.
        self.settings: Settings = settings if settings is not None else Settings()

        self.average_communication_cost = \
            self.settings.average_communication_cost

        # Built for every run.
        self.registry: tp.Optional[sts.SiteRegistry] = None
        self.annotator: tp.Optional[RankAnnotator] = None
        self.workflow: tp.Optional[wfs.WorkflowGraph] = None

        self.state: State = State.UNRANKED

        self.name = "HEFT"

    def description(self) -> str:
        return "Heft based Site Selector"

    def schedule(self, workflow: wfs.WorkflowGraph) -> wfs.WorkflowGraph:
        """Schedule the workflow according to the HEFT algorithm.

        Any error aborts the whole run. Synthetic root is removed from
        the workflow in any case.

        :param workflow: workflow that has to be scheduled.
        :return: scheduled workflow.
        """

        logger.info(f"Scheduling workflow {workflow.name} "
                    f"with {len(workflow)} tasks on sites {self.sites}")

        self.workflow = workflow
        self.state = State.UNRANKED

        if self.collector is not None:
            self.collector.start_time = datetime.now()

        for node in workflow:
            node.reset()

        self.registry = sts.SiteRegistry(
            sites=self.sites,
            capacity_provider=self.capacity_provider,
        )
        if self.collector is not None:
            self.registry.set_metric_collector(collector=self.collector)

        annotator = RankAnnotator(
            site_lookup=self.site_lookup,
            runtime_lookup=self.runtime_lookup,
            registry=self.registry,
            average_communication_cost=self.average_communication_cost,
        )
        self.annotator = annotator

        root = wfs.Node(task=wfs.Task(
            id=ROOT_ID,
            namespace="dummy",
            name="dummy",
            version="dummy",
        ))

        with workflow.synthetic_root(root):
            # Root is finished at time 0 on every site.
            root.assign(site=None, start=0, finish=0)

            nodes = annotator.annotate(workflow=workflow, root=root)
            self.state = State.RANKED

            if self.collector is not None:
                self.collector.ranked_tasks = len(nodes)

            # Stable sort keeps breadth first order for equal ranks.
            nodes = sorted(nodes, key=lambda n: n.annotation.downward_rank)
            self.state = State.ORDERED

            self.state = State.SCHEDULING
            if self.settings.workers > 1:
                with ThreadPoolExecutor(
                        max_workers=self.settings.workers,
                ) as executor:
                    self._schedule_nodes(nodes, annotator, executor)
            else:
                self._schedule_nodes(nodes, annotator)

        self.state = State.FINALIZED

        if self.collector is not None:
            self.collector.finish_time = datetime.now()
            self.collector.makespan = self.makespan()

        logger.info(f"Scheduled workflow {workflow.name} "
                    f"with makespan {self.makespan()}")

        return workflow

    def _schedule_nodes(
            self,
            nodes: list[wfs.Node],
            annotator: RankAnnotator,
            executor: tp.Optional[ThreadPoolExecutor] = None,
    ) -> None:
        for node in nodes:
            logger.debug(f"Scheduling node {node.id}")

            sites = annotator.feasible_sites(node.task)

            if executor is not None:
                estimates = executor.map(
                    lambda s: self.estimate_start_and_finish_time(node, s),
                    sites,
                )
            else:
                estimates = (self.estimate_start_and_finish_time(node, s)
                             for s in sites)

            # Strict comparison, so the first site wins ties.
            best: tp.Optional[Estimate] = None
            best_finish = inf
            for estimate in estimates:
                if estimate.finish < best_finish:
                    best = estimate
                    best_finish = estimate.finish

            node.assign(site=best.site, start=best.start, finish=best.finish)
            self.registry.schedule_job(best.site, best.start, best.finish)

            if self.collector is not None:
                self.collector.scheduled_tasks += 1

            logger.debug(f"Scheduled job {node.id} to site {best.site} "
                         f"with from {best.start} till {best.finish}")

    def calculate_ready_time(self, node: wfs.Node, site: str) -> int:
        """Return time by which all data needed by the node has reached
        the site. Parents scheduled on another site add the average
        communication cost.

        :param node: node that is being scheduled.
        :param site: candidate site.
        :return: ready time in seconds.
        """

        ready_time = 0

        for parent in node.parents:
            parent_site = parent.annotation.scheduled_site
            current = parent.annotation.actual_finish

            # Synthetic root has no site, it is finished everywhere.
            if parent_site is not None and parent_site != site:
                current = int(current + self.average_communication_cost)

            if current > ready_time:
                ready_time = current

        return ready_time

    def estimate_start_and_finish_time(
            self,
            node: wfs.Node,
            site: str,
    ) -> Estimate:
        """Estimate start and finish time of node on site. Uses non
        insertion based policy.

        :param node: node that is being scheduled.
        :param site: candidate site.
        :return: estimated start and finish time on site.
        """

        ready_time = self.calculate_ready_time(node=node, site=site)
        start = self.registry.get_available_time(site, ready_time)
        finish = start + self.annotator.get_runtime(node.task, site)

        return Estimate(site=site, start=start, finish=finish)

    def makespan(self) -> int:
        """Return the maximum of actual finish times of leaves of the
        scheduled workflow.

        :return: makespan in seconds.
        """

        if self.workflow is None:
            raise UnscheduledLeafError("No workflow has been scheduled")

        result = 0

        for node in self.workflow.leaves():
            finish = node.annotation.actual_finish
            if finish is None:
                raise UnscheduledLeafError(
                    f"Looks like the leaf node is unscheduled {node.id}"
                )

            if finish > result:
                result = finish

        return result

    def get_schedule(self) -> dict[str, list[ScheduleEvent]]:
        """Return scheduled jobs of every configured site, sorted by
        start time.

        :return: map from site name to list of jobs.
        """

        assert self.workflow is not None

        schedule: dict[str, list[ScheduleEvent]] = {
            site: [] for site in self.sites
        }

        for node in self.workflow:
            annotation = node.annotation
            if not annotation.is_scheduled():
                continue

            schedule[annotation.scheduled_site].append(ScheduleEvent(
                task=node.id,
                start=annotation.actual_start,
                end=annotation.actual_finish,
            ))

        for events in schedule.values():
            events.sort(key=lambda e: (e.start, e.end))

        return schedule

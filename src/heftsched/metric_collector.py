from collections import defaultdict
from datetime import datetime
import typing as tp


class Stats:
    """Holds various statistics for a site."""

    def __init__(self) -> None:
        # Number of tasks scheduled on site.
        self.scheduled_tasks: int = 0

        # Sum of occupation intervals on site.
        # Measures in seconds.
        self.busy_time: int = 0


class MetricCollector:
    """Collects various metrics from scheduling run. Its instance is
    passed to scheduler and site registry, so information can be
    collected everywhere in a run.
    """

    def __init__(self) -> None:
        # Scheduler name.
        self.scheduler_name: str = ""

        # Map from site name to Stats instance.
        self.sites: dict[str, Stats] = defaultdict(Stats)

        # Start and finish time of scheduling run (wall clock).
        self.start_time: tp.Optional[datetime] = None
        self.finish_time: tp.Optional[datetime] = None

        # Number of tasks that got a downward rank.
        self.ranked_tasks: int = 0
        # Number of tasks assigned to a site.
        self.scheduled_tasks: int = 0

        # Makespan of scheduled workflow. Measures in seconds.
        self.makespan: tp.Optional[int] = None

    def utilization(self, site: str, capacity: int) -> float:
        """Return share of site processor time that is busy until
        makespan.

        :param site: site name.
        :param capacity: number of processors of site.
        :return: utilization in [0; 1].
        """

        if not self.makespan:
            return 0.0

        return self.sites[site].busy_time / (capacity * self.makespan)

import typing as tp

from loguru import logger

from heftsched.errors import SiteInfoUnavailable
import heftsched.catalogs as cts
import heftsched.config as config
import heftsched.metric_collector as mc
import heftsched.sites as sts


class SiteRegistry:
    """Site registry is top-level entity that is responsible for
    communicating with sites. It is built once before scheduling from
    configured site names and is not changed during a run.
    """

    def __init__(
            self,
            sites: tp.Iterable[str],
            capacity_provider: cts.SiteCapacityProvider,
    ) -> None:
        # Map from site name to site. Keeps order of configured sites.
        self.sites: dict[str, sts.Site] = dict()

        # Collector for metrics. Should be set by scheduler.
        self.collector: tp.Optional[mc.MetricCollector] = None

        for name in sites:
            if name in self.sites:
                continue

            capacity = capacity_provider.get_capacity(site=name)
            if (not isinstance(capacity, int) or isinstance(capacity, bool)
                    or capacity < 1):
                logger.debug(f"Unusable capacity {capacity!r} of site {name}, "
                             f"using default "
                             f"{config.DEFAULT_NUMBER_OF_FREE_NODES}")
                capacity = config.DEFAULT_NUMBER_OF_FREE_NODES

            self.sites[name] = sts.Site(name=name, capacity=capacity)

            logger.debug(f"Site {name} has {capacity} free nodes")

    def __contains__(self, name: str) -> bool:
        return name in self.sites

    def __iter__(self) -> tp.Iterator[sts.Site]:
        return iter(self.sites.values())

    def set_metric_collector(self, collector: mc.MetricCollector) -> None:
        self.collector = collector

    def get_site_names(self) -> list[str]:
        return list(self.sites.keys())

    def get_site(self, name: str) -> sts.Site:
        try:
            return self.sites[name]
        except KeyError:
            raise SiteInfoUnavailable(
                f"Site information unavailable for site {name}"
            )

    def get_free_nodes(self, name: str) -> int:
        """Return number of processors of a site.

        :param name: site name.
        :return: number of processors.
        """

        return self.get_site(name).get_available_processors()

    def get_available_time(self, name: str, ready_time: int) -> int:
        """Return time when a job, whose data arrives at `ready_time`,
        can start on site.

        :param name: site name.
        :param ready_time: time when all input data is on site.
        :return: available time of site.
        """

        return self.get_site(name).earliest_available(ready_time)

    def schedule_job(self, name: str, start: int, end: int) -> None:
        """Occupy a processor of site for a job.

        :param name: site name.
        :param start: start time of job.
        :param end: end time of job.
        :return: None.
        """

        self.get_site(name).commit(start=start, end=end)

        if self.collector is not None:
            self.collector.sites[name].scheduled_tasks += 1
            self.collector.sites[name].busy_time += end - start

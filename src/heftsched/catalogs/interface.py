from abc import ABC, abstractmethod

import heftsched.workflows as wfs


class FeasibleSiteLookup(ABC):
    """Interface for looking up sites capable of running a task."""

    @abstractmethod
    def get_site_list(self, task: wfs.Task, sites: list[str]) -> list[str]:
        """Return sites from `sites` where transformation of task is
        installed. Order of returned sites should be deterministic, it
        is used for breaking ties.

        :param task: task to look up.
        :param sites: configured sites.
        :return: list of site names.
        """

        pass


class RuntimeLookup(ABC):
    """Interface for looking up expected runtime of a task."""

    @abstractmethod
    def get_runtime(self, task: wfs.Task, site: str) -> int:
        """Return expected runtime of task on site. Should raise
        `RuntimeUnavailable` if runtime is missing or not positive.

        :param task: task to look up.
        :param site: site name.
        :return: runtime in seconds.
        """

        pass


class SiteCapacityProvider(ABC):
    """Interface for looking up number of processors of a site."""

    @abstractmethod
    def get_capacity(self, site: str) -> int:
        """Return number of processors of site. Should fall back to
        default value if catalog has no usable value.

        :param site: site name.
        :return: number of processors.
        """

        pass

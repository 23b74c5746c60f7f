class HeftError(Exception):
    """Base class for all errors raised by the scheduler."""


class GraphError(HeftError):
    """Structural reference to a node that is not in the graph."""


class SchedulingError(HeftError):
    """Scheduling run can not be completed."""


class NoFeasibleSite(SchedulingError):
    """No site is capable of running a task."""


class RuntimeUnavailable(SchedulingError):
    """Expected runtime of a task on a site is missing or invalid."""


class SiteInfoUnavailable(SchedulingError):
    """Site has no registered capacity or timeline."""


class UnscheduledLeafError(SchedulingError):
    """Makespan was requested while some leaf has no finish time."""

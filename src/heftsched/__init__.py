import heftsched.workflows
import heftsched.catalogs
import heftsched.sites
import heftsched.schedulers

from .config import LOGS_DIR
from .errors import (
    GraphError,
    HeftError,
    NoFeasibleSite,
    RuntimeUnavailable,
    SchedulingError,
    SiteInfoUnavailable,
    UnscheduledLeafError,
)
from .metric_collector import MetricCollector, Stats

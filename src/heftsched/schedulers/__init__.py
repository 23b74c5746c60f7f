from .interface import SchedulerInterface
from .heft import HeftScheduler, RankAnnotator, ScheduleEvent, Settings

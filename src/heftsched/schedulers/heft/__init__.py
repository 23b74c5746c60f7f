from .rank import RankAnnotator
from .scheduler import (
    Estimate,
    HeftScheduler,
    ROOT_ID,
    ScheduleEvent,
    Settings,
    State,
)

"""Meeting scheduler: assign a student roster to calendar dates, track attendance, export to Excel."""

from .calendar_days import CalendarDay, format_date, generate_calendar_days, is_today, parse_date
from .config import Settings
from .export import EXPORT_FILENAME, Sheet, format_export, write_workbook
from .roster import DEFAULT_ROSTER, Student, load_roster, roster_labels
from .scheduling import (
    ATTENDANCE_STATUSES,
    BY_AGE,
    REQUIRED_MEETINGS,
    Meeting,
    PriorityPolicy,
    always_present,
    assign,
    get_policy,
    parse_status,
    random_attendance,
)
from .state import (
    GenerateSchedule,
    SchedulerState,
    SetView,
    ToggleDate,
    UpdateAttendance,
    reduce,
)
from .summary import DaySummary, Summary, summarize

__version__ = "1.0.0"

# Scheduling engine
# - Rank the roster by a priority weight (descending, stable on ties)
# - Per-day capacity: fixed by the caller/policy, or ceil(students / dates)
# - One cursor walks the ranked roster, filling dates in order
# - Initial attendance comes from an injected chooser

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .exceptions import InvalidStatusError, UnknownPolicyError
from .roster import Student

log = logging.getLogger(__name__)

ATTENDANCE_STATUSES = ("Present", "Absent", "Late")
DEFAULT_LINK_BASE = "https://meet.example.com"

AttendanceChooser = Callable[[], str]


@dataclass(frozen=True)
class Meeting:
    id: str
    date: str
    student: Student
    link: str
    attendance: str


@dataclass(frozen=True)
class PriorityPolicy:
    """How students are ranked and how many fit on a day.

    `capacity=None` means balanced: ceil(roster size / number of dates).
    """
    name: str
    weight: Callable[[Student], int]
    weight_label: str
    capacity: Optional[int] = None


REQUIRED_MEETINGS = PriorityPolicy(
    name="required_meetings",
    weight=lambda s: s.required_meetings,
    weight_label="Required Meetings",
)
BY_AGE = PriorityPolicy(
    name="age",
    weight=lambda s: s.age,
    weight_label="Priority (Age)",
    capacity=5,
)
POLICIES: Dict[str, PriorityPolicy] = {p.name: p for p in (REQUIRED_MEETINGS, BY_AGE)}


def get_policy(name: str) -> PriorityPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise UnknownPolicyError(f"Unknown priority policy {name!r}; choose from {sorted(POLICIES)}") from None


def always_present() -> str:
    return "Present"


def random_attendance(rng: Optional[np.random.Generator] = None) -> AttendanceChooser:
    """Chooser drawing uniformly from ATTENDANCE_STATUSES."""
    rng = rng if rng is not None else np.random.default_rng()

    def choose() -> str:
        return str(rng.choice(ATTENDANCE_STATUSES))

    return choose


def parse_status(value: str) -> str:
    status = str(value).strip().capitalize()
    if status not in ATTENDANCE_STATUSES:
        raise InvalidStatusError(f"Attendance must be one of {', '.join(ATTENDANCE_STATUSES)}; got {value!r}")
    return status


def meeting_link(meeting_id: str, link_base: str = DEFAULT_LINK_BASE) -> str:
    return f"{link_base.rstrip('/')}/{meeting_id}"


def rank_students(roster: Sequence[Student], policy: PriorityPolicy = REQUIRED_MEETINGS) -> List[Student]:
    # sorted() is stable, so equal weights keep roster order
    return sorted(roster, key=policy.weight, reverse=True)


def daily_capacity(num_students: int, num_dates: int, meetings_per_day: Optional[int] = None,
                   policy: PriorityPolicy = REQUIRED_MEETINGS) -> int:
    if meetings_per_day is not None:
        return meetings_per_day
    if policy.capacity is not None:
        return policy.capacity
    return math.ceil(num_students / num_dates)


def assign(
    selected_dates: Sequence[str],
    roster: Sequence[Student],
    meetings_per_day: Optional[int] = None,
    policy: PriorityPolicy = REQUIRED_MEETINGS,
    choose_attendance: AttendanceChooser = always_present,
    link_base: str = DEFAULT_LINK_BASE,
) -> Dict[str, List[Meeting]]:
    """Map each selected date to its ordered list of meetings.

    Every selected date becomes a key, even when the roster runs out before
    reaching it. Never raises for empty inputs.
    """
    if not selected_dates:
        return {}

    ranked = rank_students(roster, policy)
    capacity = daily_capacity(len(ranked), len(selected_dates), meetings_per_day, policy)

    meetings: Dict[str, List[Meeting]] = {}
    cursor = 0
    for date_str in selected_dates:
        day = []
        while len(day) < capacity and cursor < len(ranked):
            student = ranked[cursor]
            mid = f"{date_str}-{student.id}"
            day.append(Meeting(
                id=mid,
                date=date_str,
                student=student,
                link=meeting_link(mid, link_base),
                attendance=choose_attendance(),
            ))
            cursor += 1
        meetings[date_str] = day

    log.info(
        "Scheduled %d of %d students over %d date(s) (policy=%s, capacity=%d)",
        cursor, len(ranked), len(selected_dates), policy.name, capacity,
    )
    return meetings

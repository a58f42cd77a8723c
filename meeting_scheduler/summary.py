"""Counts derived from an assignment table.

Always recomputed from the table passed in; nothing here holds state between calls.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .scheduling import ATTENDANCE_STATUSES, Meeting


def _status_counter() -> Counter:
    return Counter({s: 0 for s in ATTENDANCE_STATUSES})


@dataclass
class DaySummary:
    total: int = 0
    statuses: Counter = field(default_factory=_status_counter)
    classes: Counter = field(default_factory=Counter)
    instructors: Counter = field(default_factory=Counter)

    @property
    def present(self) -> int:
        return self.statuses["Present"]

    @property
    def absent(self) -> int:
        return self.statuses["Absent"]

    @property
    def late(self) -> int:
        return self.statuses["Late"]


@dataclass
class Summary:
    dates: Dict[str, DaySummary] = field(default_factory=dict)
    statuses: Counter = field(default_factory=_status_counter)
    classes: Counter = field(default_factory=Counter)
    instructors: Counter = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(d.total for d in self.dates.values())


def summarize_day(day_meetings: List[Meeting]) -> DaySummary:
    day = DaySummary(total=len(day_meetings))
    for m in day_meetings:
        day.statuses[m.attendance] += 1
        day.classes[m.student.class_name] += 1
        day.instructors[m.student.instructor] += 1
    return day


def summarize(assignments: Mapping[str, List[Meeting]]) -> Summary:
    summary = Summary()
    for date_str, day_meetings in assignments.items():
        day = summarize_day(day_meetings)
        summary.dates[date_str] = day
        summary.statuses.update(day.statuses)
        summary.classes.update(day.classes)
        summary.instructors.update(day.instructors)
    return summary

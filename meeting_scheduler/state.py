"""Application state and the transitions the UI can request.

`reduce(state, event)` is the only way state changes. States are frozen; each
transition returns a new value (or the same one when nothing changed).
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .roster import Student
from .scheduling import (
    DEFAULT_LINK_BASE,
    REQUIRED_MEETINGS,
    AttendanceChooser,
    Meeting,
    PriorityPolicy,
    always_present,
    assign,
)

log = logging.getLogger(__name__)

CALENDAR = "calendar"
OVERVIEW = "overview"
VIEWS = (CALENDAR, OVERVIEW)


@dataclass(frozen=True)
class SchedulerState:
    selected_dates: Tuple[str, ...] = ()
    assignments: Dict[str, List[Meeting]] = field(default_factory=dict)
    view: str = CALENDAR

    @property
    def has_schedule(self) -> bool:
        return bool(self.assignments)


@dataclass(frozen=True)
class ToggleDate:
    date: str


@dataclass(frozen=True)
class GenerateSchedule:
    roster: Sequence[Student]
    meetings_per_day: Optional[int] = None
    policy: PriorityPolicy = REQUIRED_MEETINGS
    choose_attendance: AttendanceChooser = always_present
    link_base: str = DEFAULT_LINK_BASE


@dataclass(frozen=True)
class SetView:
    view: str


@dataclass(frozen=True)
class UpdateAttendance:
    date: str
    meeting_id: str
    status: str


def toggle_date(state: SchedulerState, date: str) -> SchedulerState:
    if date in state.selected_dates:
        dates = tuple(d for d in state.selected_dates if d != date)
    else:
        dates = tuple(sorted(state.selected_dates + (date,)))
    return replace(state, selected_dates=dates)


def generate_schedule(state: SchedulerState, event: GenerateSchedule) -> SchedulerState:
    assignments = assign(
        state.selected_dates,
        event.roster,
        meetings_per_day=event.meetings_per_day,
        policy=event.policy,
        choose_attendance=event.choose_attendance,
        link_base=event.link_base,
    )
    # overview stays unreachable while the table is empty
    return replace(state, assignments=assignments, view=OVERVIEW if assignments else CALENDAR)


def set_view(state: SchedulerState, view: str) -> SchedulerState:
    if view not in VIEWS or view == state.view:
        return state
    # Overview has nothing to show until a schedule exists
    if view == OVERVIEW and not state.has_schedule:
        log.debug("Ignoring switch to overview: no schedule generated")
        return state
    return replace(state, view=view)


def update_attendance(state: SchedulerState, date: str, meeting_id: str, status: str) -> SchedulerState:
    day = state.assignments.get(date)
    if not day:
        return state
    for i, m in enumerate(day):
        if m.id == meeting_id:
            new_day = list(day)
            new_day[i] = replace(m, attendance=status)
            assignments = dict(state.assignments)
            assignments[date] = new_day
            return replace(state, assignments=assignments)
    return state


def reduce(state: SchedulerState, event) -> SchedulerState:
    log.debug("Applying %r", event)
    if isinstance(event, ToggleDate):
        return toggle_date(state, event.date)
    if isinstance(event, GenerateSchedule):
        return generate_schedule(state, event)
    if isinstance(event, SetView):
        return set_view(state, event.view)
    if isinstance(event, UpdateAttendance):
        return update_attendance(state, event.date, event.meeting_id, event.status)
    return state

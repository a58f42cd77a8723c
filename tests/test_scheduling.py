import math

import numpy as np
import pytest

from meeting_scheduler.exceptions import InvalidStatusError, UnknownPolicyError
from meeting_scheduler.roster import DEFAULT_ROSTER, Student
from meeting_scheduler.scheduling import (
    ATTENDANCE_STATUSES,
    BY_AGE,
    REQUIRED_MEETINGS,
    assign,
    get_policy,
    parse_status,
    random_attendance,
    rank_students,
)

DATES = ["2024-01-01", "2024-01-02", "2024-01-03"]


def test_single_date_orders_by_weight(small_roster):
    table = assign(["2024-01-01"], small_roster)
    assert list(table) == ["2024-01-01"]
    assert [m.student.id for m in table["2024-01-01"]] == [1, 3, 2]


def test_meeting_id_and_link(small_roster):
    table = assign(["2024-01-01"], small_roster)
    first = table["2024-01-01"][0]
    assert first.id == "2024-01-01-1"
    assert first.link == "https://meet.example.com/2024-01-01-1"
    assert first.date == "2024-01-01"
    assert first.attendance == "Present"
    assert first.student is small_roster[0]


def test_custom_link_base(small_roster):
    table = assign(["2024-01-01"], small_roster, link_base="https://example.org/rooms/")
    assert table["2024-01-01"][0].link == "https://example.org/rooms/2024-01-01-1"


def test_empty_dates_gives_empty_table(small_roster):
    assert assign([], small_roster) == {}


def test_empty_roster_keeps_every_date():
    assert assign(DATES, []) == {d: [] for d in DATES}


def test_ties_keep_roster_order():
    roster = [Student(i, f"S{i}", 20, "Math", "Dr. Mehta", 2) for i in range(1, 6)]
    assert [s.id for s in rank_students(roster)] == [1, 2, 3, 4, 5]


def test_roster_not_mutated(small_roster):
    before = list(small_roster)
    assign(DATES, small_roster)
    assert small_roster == before


@pytest.mark.parametrize("num_dates", [1, 2, 3, 6, 7, 20, 25])
def test_balanced_capacity_schedules_everyone_once(num_dates):
    roster = list(DEFAULT_ROSTER)
    dates = [f"2024-02-{d:02d}" for d in range(1, num_dates + 1)]
    table = assign(dates, roster)

    cap = math.ceil(len(roster) / num_dates)
    assert all(len(day) <= cap for day in table.values())

    scheduled = [m.student.id for day in table.values() for m in day]
    assert len(scheduled) == min(len(roster), num_dates * cap)
    assert sorted(scheduled) == sorted(s.id for s in roster)

    roster_ids = {s.id for s in roster}
    for date_str, day in table.items():
        assert date_str in dates
        for m in day:
            assert m.date == date_str
            assert m.student.id in roster_ids


def test_cursor_fills_dates_in_order():
    roster = list(DEFAULT_ROSTER)
    table = assign(DATES, roster)
    ranked = rank_students(roster)
    flat = [m.student for day in table.values() for m in day]
    assert flat == ranked
    assert [len(day) for day in table.values()] == [7, 7, 6]


def test_explicit_meetings_per_day_leaves_later_students_out():
    roster = list(DEFAULT_ROSTER)
    table = assign(DATES[:2], roster, meetings_per_day=4)
    assert [len(day) for day in table.values()] == [4, 4]
    ids = [m.student.id for day in table.values() for m in day]
    assert len(set(ids)) == 8


def test_age_policy_uses_fixed_capacity_and_age_order():
    roster = list(DEFAULT_ROSTER)
    table = assign(DATES, roster, policy=BY_AGE)
    assert [len(day) for day in table.values()] == [5, 5, 5]
    first_day = table[DATES[0]]
    assert first_day[0].student.name == "Tanvi Choudhary"
    ages = [m.student.age for day in table.values() for m in day]
    assert ages == sorted(ages, reverse=True)


def test_injected_attendance_chooser(small_roster, cycle_attendance):
    table = assign(["2024-01-01"], small_roster, choose_attendance=cycle_attendance)
    assert [m.attendance for m in table["2024-01-01"]] == ["Present", "Absent", "Late"]


def test_random_attendance_is_reproducible_with_seed(small_roster):
    a = assign(DATES, list(DEFAULT_ROSTER), choose_attendance=random_attendance(np.random.default_rng(7)))
    b = assign(DATES, list(DEFAULT_ROSTER), choose_attendance=random_attendance(np.random.default_rng(7)))
    assert a == b
    statuses = {m.attendance for day in a.values() for m in day}
    assert statuses <= set(ATTENDANCE_STATUSES)
    assert all(isinstance(s, str) for s in statuses)


def test_get_policy():
    assert get_policy("required_meetings") is REQUIRED_MEETINGS
    assert get_policy("age") is BY_AGE
    with pytest.raises(UnknownPolicyError):
        get_policy("height")


def test_parse_status():
    assert parse_status("late") == "Late"
    assert parse_status(" Present ") == "Present"
    with pytest.raises(InvalidStatusError):
        parse_status("Excused")

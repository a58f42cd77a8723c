import pandas as pd
import pytest

from meeting_scheduler.exceptions import RosterError
from meeting_scheduler.roster import (
    DEFAULT_ROSTER,
    load_roster,
    roster_from_frame,
    roster_labels,
    roster_to_frame,
)

CSV = (
    "ID,Student Name,Age,Class Name,Instructor Name,Required Meetings\n"
    "1,Aarav Sharma,20,Math,Dr. Mehta,3\n"
    "2,Isha Verma,19,Science,Prof. Raghavan,2\n"
)


def test_default_roster_is_unique():
    assert len(DEFAULT_ROSTER) == 20
    assert len({s.id for s in DEFAULT_ROSTER}) == 20


def test_load_roster_comma():
    students = load_roster(CSV.encode("utf-8"))
    assert [s.name for s in students] == ["Aarav Sharma", "Isha Verma"]
    assert students[0].required_meetings == 3
    assert students[1].instructor == "Prof. Raghavan"


def test_load_roster_semicolon_cp1252():
    raw = CSV.replace(",", ";").replace("Isha", "Ísha").encode("cp1252")
    students = load_roster(raw)
    assert students[1].name == "Ísha Verma"


def test_header_aliases_and_generated_ids():
    df = pd.DataFrame({
        "name": ["A", "B"],
        "age": [18, 19],
        "subject": ["Math", "Art"],
        "teacher": ["T1", "T2"],
        "meetings": [1, 4],
    })
    students = roster_from_frame(df)
    assert [s.id for s in students] == [1, 2]
    assert students[1].class_name == "Art"


def test_blank_names_are_skipped():
    df = pd.DataFrame({
        "Student Name": ["A", None],
        "Age": [18, 19],
        "Class": ["Math", "Math"],
        "Instructor": ["T1", "T1"],
        "Required Meetings": [1, 1],
    })
    assert len(roster_from_frame(df)) == 1


def test_missing_column():
    df = pd.DataFrame({"Student Name": ["A"], "Age": [18]})
    with pytest.raises(RosterError, match="missing"):
        roster_from_frame(df)


def test_bad_number():
    bad = CSV.replace("19,Science", "nineteen,Science")
    with pytest.raises(RosterError, match="age"):
        load_roster(bad.encode("utf-8"))


def test_duplicate_ids():
    dup = CSV.replace("2,Isha", "1,Isha")
    with pytest.raises(RosterError, match="duplicate"):
        load_roster(dup.encode("utf-8"))


def test_to_frame_and_labels():
    df = roster_to_frame(DEFAULT_ROSTER)
    assert len(df) == 20
    assert list(roster_from_frame(df)) == list(DEFAULT_ROSTER)

    classes, instructors = roster_labels(DEFAULT_ROSTER)
    assert classes == ["Math", "Science", "English"]
    assert instructors == ["Dr. Mehta", "Prof. Raghavan", "Ms. Kapoor"]

import pytest

from meeting_scheduler.roster import Student


@pytest.fixture
def small_roster():
    return [
        Student(1, "Aarav Sharma", 20, "Math", "Dr. Mehta", 3),
        Student(2, "Isha Verma", 19, "Science", "Prof. Raghavan", 1),
        Student(3, "Rohan Gupta", 21, "English", "Ms. Kapoor", 2),
    ]


@pytest.fixture
def cycle_attendance():
    """Deterministic chooser: Present, Absent, Late, Present, ..."""
    seq = iter(["Present", "Absent", "Late"] * 100)
    return lambda: next(seq)

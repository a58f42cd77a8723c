# Roster of students eligible for scheduling.
# - Embedded default roster (20 students)
# - Robust CSV ingestion for a custom roster (any encoding / separator)
# - Header aliases so "Student Name", "name", "student_name" all work

import csv
import io
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from .exceptions import RosterError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Student:
    id: int
    name: str
    age: int
    class_name: str
    instructor: str
    required_meetings: int


DEFAULT_ROSTER: Tuple[Student, ...] = (
    Student(1, "Aarav Sharma", 20, "Math", "Dr. Mehta", 3),
    Student(2, "Isha Verma", 19, "Science", "Prof. Raghavan", 2),
    Student(3, "Rohan Gupta", 21, "English", "Ms. Kapoor", 4),
    Student(4, "Priya Nair", 18, "Math", "Dr. Mehta", 1),
    Student(5, "Karan Patel", 22, "Science", "Prof. Raghavan", 3),
    Student(6, "Neha Singh", 19, "English", "Ms. Kapoor", 2),
    Student(7, "Vikram Menon", 20, "Math", "Dr. Mehta", 5),
    Student(8, "Ananya Reddy", 18, "Science", "Prof. Raghavan", 2),
    Student(9, "Siddharth Joshi", 23, "English", "Ms. Kapoor", 3),
    Student(10, "Meera Iyer", 19, "Math", "Dr. Mehta", 1),
    Student(11, "Arjun Desai", 21, "Science", "Prof. Raghavan", 4),
    Student(12, "Pooja Bansal", 20, "English", "Ms. Kapoor", 2),
    Student(13, "Dev Chawla", 22, "Math", "Dr. Mehta", 3),
    Student(14, "Riya Malhotra", 18, "Science", "Prof. Raghavan", 1),
    Student(15, "Aditya Kulkarni", 24, "English", "Ms. Kapoor", 2),
    Student(16, "Manish Sinha", 19, "Math", "Dr. Mehta", 4),
    Student(17, "Shruti Agarwal", 21, "Science", "Prof. Raghavan", 3),
    Student(18, "Lakshmi Krishnan", 20, "English", "Ms. Kapoor", 1),
    Student(19, "Rahul Bhatia", 23, "Math", "Dr. Mehta", 2),
    Student(20, "Tanvi Choudhary", 25, "Science", "Prof. Raghavan", 5),
)

# Accepted headers per field (compared after normalize())
COLUMN_ALIASES: Dict[str, Sequence[str]] = {
    "id": ["id", "student id", "student no", "number"],
    "name": ["student name", "name", "full name", "student"],
    "age": ["age"],
    "class_name": ["class name", "class", "subject"],
    "instructor": ["instructor name", "instructor", "teacher", "tutor"],
    "required_meetings": ["required meetings", "meetings", "meeting count", "priority"],
}

ROSTER_COLUMNS = ["ID", "Student Name", "Age", "Class Name", "Instructor Name", "Required Meetings"]


def normalize(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", " ", str(s).lower()).strip()


def read_csv_robust(raw: bytes, label_for_error: str) -> pd.DataFrame:
    """Read CSV bytes into a DataFrame, trying multiple encodings and separators."""
    encodings = ["utf-8", "utf-8-sig", "cp1252", "iso-8859-1"]
    seps = [None, ",", ";", "\t", "|"]
    last_err = None
    for enc in encodings:
        for sep in seps:
            try:
                df = pd.read_csv(io.BytesIO(raw), encoding=enc, engine="python", sep=sep)
                if df.shape[1] == 0:
                    raise ValueError("Parsed 0 columns.")
                return df
            except (ValueError, UnicodeDecodeError, csv.Error, pd.errors.ParserError) as e:
                last_err = f"{type(e).__name__}: {e}"
                continue
    raise RosterError(
        f"Could not read {label_for_error} CSV. Last error: {last_err}. "
        "Try re-exporting as CSV (UTF-8)."
    )


def detect_columns(df: pd.DataFrame) -> Dict[str, str]:
    """Map each Student field to a column of `df`; the id column is optional."""
    cols_n = {normalize(c): c for c in df.columns}
    found = {}
    for field, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in cols_n:
                found[field] = cols_n[alias]
                break
    missing = [f for f in COLUMN_ALIASES if f not in found and f != "id"]
    if missing:
        raise RosterError(f"Roster is missing column(s): {', '.join(missing)}")
    return found


def _as_int(value, field: str, row_no: int) -> int:
    num = pd.to_numeric(value, errors="coerce")
    if pd.isna(num):
        raise RosterError(f"Row {row_no}: '{field}' must be a number, got {value!r}")
    return int(round(num))


def roster_from_frame(df: pd.DataFrame) -> List[Student]:
    cols = detect_columns(df)
    students = []
    seen = set()
    for i, (_, r) in enumerate(df.iterrows(), start=1):
        raw_name = r[cols["name"]]
        name = "" if pd.isna(raw_name) else str(raw_name).strip()
        if not name or name.lower() == "nan":
            continue
        sid = _as_int(r[cols["id"]], "id", i) if "id" in cols else i
        if sid in seen:
            raise RosterError(f"Row {i}: duplicate student id {sid}")
        seen.add(sid)
        students.append(Student(
            id=sid,
            name=name,
            age=_as_int(r[cols["age"]], "age", i),
            class_name=str(r[cols["class_name"]]).strip(),
            instructor=str(r[cols["instructor"]]).strip(),
            required_meetings=_as_int(r[cols["required_meetings"]], "required_meetings", i),
        ))
    if not students:
        raise RosterError("Roster contains no students.")
    return students


def load_roster(raw: bytes, label: str = "roster") -> List[Student]:
    students = roster_from_frame(read_csv_robust(raw, label))
    log.info("Loaded %d students from %s", len(students), label)
    return students


def roster_to_frame(roster: Sequence[Student]) -> pd.DataFrame:
    return pd.DataFrame(
        [[s.id, s.name, s.age, s.class_name, s.instructor, s.required_meetings] for s in roster],
        columns=ROSTER_COLUMNS,
    )


def roster_labels(roster: Sequence[Student]) -> Tuple[List[str], List[str]]:
    """Class and instructor labels in order of first appearance."""
    classes = list(dict.fromkeys(s.class_name for s in roster))
    instructors = list(dict.fromkeys(s.instructor for s in roster))
    return classes, instructors

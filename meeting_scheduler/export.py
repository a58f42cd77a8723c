# Export
# - format_export(): schedule + summary -> ordered named tables (no I/O)
# - write_workbook(): tables -> .xlsx bytes (openpyxl), one sheet per table

import io
import logging
from typing import List, Mapping, NamedTuple, Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from .scheduling import ATTENDANCE_STATUSES, REQUIRED_MEETINGS, Meeting, PriorityPolicy
from .summary import Summary

log = logging.getLogger(__name__)

EXPORT_FILENAME = "meeting-schedule.xlsx"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
OVERVIEW_SHEET = "Overview"


class Sheet(NamedTuple):
    name: str
    frame: pd.DataFrame


def overview_columns(class_labels: Sequence[str], instructor_labels: Sequence[str]) -> List[str]:
    return ["Date", "Total Meetings", *ATTENDANCE_STATUSES, *class_labels, *instructor_labels]


def day_columns(policy: PriorityPolicy = REQUIRED_MEETINGS) -> List[str]:
    return ["Student Name", "Age", "Class Name", "Instructor Name", policy.weight_label, "Meeting Link", "Attendance"]


def build_overview_df(summary: Summary, class_labels: Sequence[str], instructor_labels: Sequence[str]) -> pd.DataFrame:
    rows = []
    for date_str, day in summary.dates.items():
        rows.append(
            [date_str, day.total]
            + [day.statuses[s] for s in ATTENDANCE_STATUSES]
            + [day.classes[c] for c in class_labels]
            + [day.instructors[i] for i in instructor_labels]
        )
    return pd.DataFrame(rows, columns=overview_columns(class_labels, instructor_labels))


def build_day_df(day_meetings: Sequence[Meeting], policy: PriorityPolicy = REQUIRED_MEETINGS) -> pd.DataFrame:
    """One row per meeting; the priority column comes from `policy`."""
    rows = [
        [m.student.name, m.student.age, m.student.class_name, m.student.instructor,
         policy.weight(m.student), m.link, m.attendance]
        for m in day_meetings
    ]
    return pd.DataFrame(rows, columns=day_columns(policy))


def format_export(
    assignments: Mapping[str, Sequence[Meeting]],
    summary: Summary,
    class_labels: Sequence[str],
    instructor_labels: Sequence[str],
    policy: PriorityPolicy = REQUIRED_MEETINGS,
) -> List[Sheet]:
    sheets = [Sheet(OVERVIEW_SHEET, build_overview_df(summary, class_labels, instructor_labels))]
    for date_str, day_meetings in assignments.items():
        sheets.append(Sheet(date_str, build_day_df(day_meetings, policy)))
    return sheets


def excel_autofit(ws):
    for col_idx, column_cells in enumerate(
        ws.iter_cols(min_row=1, max_row=ws.max_row, min_col=1, max_col=ws.max_column), start=1
    ):
        max_len = 0
        for cell in column_cells:
            val = "" if cell.value is None else str(cell.value)
            max_len = max(max_len, len(val))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max(12, max_len + 2), 80)


def _cell(value):
    # openpyxl rejects numpy scalars
    return value.item() if hasattr(value, "item") else value


def write_workbook(sheets: Sequence[Sheet]) -> bytes:
    wb = Workbook()
    wb.remove(wb.active)
    for sheet in sheets:
        ws = wb.create_sheet(sheet.name[:31])
        ws.append(list(sheet.frame.columns))
        for row in sheet.frame.itertuples(index=False):
            ws.append([_cell(v) for v in row])
        excel_autofit(ws)

    buf = io.BytesIO()
    wb.save(buf)
    log.info("Exported workbook with %d sheet(s)", len(sheets))
    return buf.getvalue()

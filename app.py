# app.py
# Meeting Scheduler (Streamlit)
# - Pick dates on a 30-day calendar
# - Roster ranked by required meetings (or by age), spread over the picked dates
# - Dashboard: totals, attendance, class & instructor distribution
# - Edit attendance per meeting
# - Excel export (Overview + one sheet per date)
# - Optional roster CSV upload (any encoding/separator)
#
# Run: streamlit run app.py

import logging

import numpy as np
import pandas as pd
import streamlit as st

from meeting_scheduler.calendar_days import generate_calendar_days, is_today, parse_date
from meeting_scheduler.config import Settings
from meeting_scheduler.exceptions import ConfigError, InvalidDateError, MeetingSchedulerError, RosterError
from meeting_scheduler.export import XLSX_MIME, build_day_df, day_columns, format_export, write_workbook
from meeting_scheduler.roster import DEFAULT_ROSTER, load_roster, roster_to_frame
from meeting_scheduler.scheduling import ATTENDANCE_STATUSES, parse_status, random_attendance
from meeting_scheduler.state import (
    CALENDAR,
    OVERVIEW,
    GenerateSchedule,
    SchedulerState,
    SetView,
    ToggleDate,
    UpdateAttendance,
    reduce,
)
from meeting_scheduler.summary import summarize

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger("meeting_scheduler.app")

st.set_page_config(page_title="Meeting Scheduler", layout="wide")
st.title("Dynamic Class Meeting Scheduler")
st.caption("Schedule and manage student meetings with priority ordering.")

st.markdown(
    """
    <style>
      .stButton>button, .stDownloadButton>button { border-radius: 8px; }
      div[data-testid="stMetricValue"] { font-size: 2rem; }
    </style>
    """,
    unsafe_allow_html=True,
)

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# ──────────────────────────────────────────────────────────────────────────────
# Session state
# ──────────────────────────────────────────────────────────────────────────────
if "scheduler" not in st.session_state:
    st.session_state.scheduler = SchedulerState()
    st.session_state.generation = 0


def dispatch(event):
    st.session_state.scheduler = reduce(st.session_state.scheduler, event)


# ──────────────────────────────────────────────────────────────────────────────
# Sidebar: settings & roster
# ──────────────────────────────────────────────────────────────────────────────
with st.sidebar:
    st.header("Settings")
    days_ahead = st.number_input("Days shown on calendar", min_value=1, max_value=120, value=30, step=1)
    policy_name = st.selectbox(
        "Priority",
        ["required_meetings", "age"],
        format_func=lambda p: "Required meetings" if p == "required_meetings" else "Age",
    )
    per_day = st.number_input("Meetings per day (0 = automatic)", min_value=0, max_value=200, value=0, step=1)
    seed = st.number_input("Random seed for initial attendance (0 = random)", min_value=0, value=0, step=1)
    roster_file = st.file_uploader("Roster (CSV, optional)", type=["csv"], key="roster_csv")
    st.caption("• Roster CSV columns: Student Name, Age, Class Name, Instructor Name, Required Meetings (ID optional).")

try:
    settings = Settings(
        days_ahead=int(days_ahead),
        policy=policy_name,
        meetings_per_day=int(per_day) or None,
        random_seed=int(seed) or None,
    )
except ConfigError as e:
    st.error(f"Invalid settings: {e}")
    st.stop()

if roster_file is not None:
    try:
        roster = load_roster(roster_file.getvalue(), roster_file.name)
    except RosterError as e:
        st.error(str(e))
        st.stop()
else:
    roster = list(DEFAULT_ROSTER)

with st.sidebar:
    with st.expander(f"Roster ({len(roster)} students)"):
        st.dataframe(roster_to_frame(roster), use_container_width=True, hide_index=True)

policy = settings.priority_policy
state = st.session_state.scheduler

# ──────────────────────────────────────────────────────────────────────────────
# Navigation
# ──────────────────────────────────────────────────────────────────────────────
nav1, nav2, _ = st.columns([1, 1, 6])
nav1.button("Calendar", on_click=dispatch, args=(SetView(CALENDAR),),
            type="primary" if state.view == CALENDAR else "secondary")
nav2.button("Overview", on_click=dispatch, args=(SetView(OVERVIEW),), disabled=not state.has_schedule,
            type="primary" if state.view == OVERVIEW else "secondary")


# ──────────────────────────────────────────────────────────────────────────────
# Calendar view
# ──────────────────────────────────────────────────────────────────────────────
def on_generate():
    # fresh editor widgets for the new schedule
    st.session_state.generation += 1
    rng = np.random.default_rng(settings.random_seed)
    dispatch(GenerateSchedule(
        roster=roster,
        meetings_per_day=settings.meetings_per_day,
        policy=policy,
        choose_attendance=random_attendance(rng),
        link_base=settings.link_base,
    ))


def on_toggle(value):
    try:
        dispatch(ToggleDate(parse_date(value)))
    except InvalidDateError as e:
        st.error(str(e))


def render_calendar(state: SchedulerState):
    st.subheader("1) Select meeting dates")
    days = generate_calendar_days(settings.days_ahead)
    cols = st.columns(7)
    for i, name in enumerate(WEEKDAYS):
        cols[i].markdown(f"**{name}**")

    # pad so the first day lands under its weekday
    cells = [None] * days[0].weekday + days
    for start in range(0, len(cells), 7):
        row = st.columns(7)
        for col, day in zip(row, cells[start:start + 7]):
            if day is None:
                continue
            selected = day.iso in state.selected_dates
            label = day.label + (" •" if is_today(day.date) else "")
            col.button(label, key=f"day_{day.iso}", on_click=on_toggle, args=(day.iso,),
                       type="primary" if selected else "secondary", use_container_width=True)

    st.write(f"Selected dates: **{len(state.selected_dates)}**")
    if state.selected_dates:
        st.button("Generate Meeting Schedule", type="primary", on_click=on_generate)
    else:
        st.info("Click dates to select them, then generate the schedule.")


# ──────────────────────────────────────────────────────────────────────────────
# Overview view
# ──────────────────────────────────────────────────────────────────────────────
def apply_attendance_edits(date_str, day_meetings, edited: pd.DataFrame) -> bool:
    changed = False
    for m, new_status in zip(day_meetings, edited["Attendance"]):
        if new_status == m.attendance:
            continue
        try:
            status = parse_status(new_status)
        except MeetingSchedulerError as e:
            st.warning(str(e))
            continue
        dispatch(UpdateAttendance(date_str, m.id, status))
        log.info("Attendance for %s set to %s", m.id, status)
        changed = True
    return changed


def render_overview(state: SchedulerState):
    summary = summarize(state.assignments)
    class_labels, instructor_labels = settings.labels_for(roster)

    st.subheader("Meeting schedule overview")
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total Meetings", summary.total)
    k2.metric("Present", summary.statuses["Present"])
    k3.metric("Absent", summary.statuses["Absent"])
    k4.metric("Late", summary.statuses["Late"])

    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Class distribution**")
        st.dataframe(pd.DataFrame(summary.classes.items(), columns=["Class", "Meetings"]),
                     use_container_width=True, hide_index=True)
    with c2:
        st.markdown("**Instructor distribution**")
        st.dataframe(pd.DataFrame(summary.instructors.items(), columns=["Instructor", "Meetings"]),
                     use_container_width=True, hide_index=True)

    sheets = format_export(state.assignments, summary, class_labels, instructor_labels,
                           policy=policy)
    st.download_button(
        "Download Excel (.xlsx)",
        data=write_workbook(sheets),
        file_name=settings.export_filename,
        mime=XLSX_MIME,
    )

    st.subheader("Daily schedule")
    changed = False
    for date_str, day_meetings in state.assignments.items():
        day = summary.dates[date_str]
        st.markdown(
            f"**{date_str}** • Total: {day.total} • Present: {day.present} • "
            f"Absent: {day.absent} • Late: {day.late}"
        )
        if not day_meetings:
            st.caption("No students left to schedule on this date.")
            continue
        edited = st.data_editor(
            build_day_df(day_meetings, policy),
            key=f"editor_{st.session_state.generation}_{date_str}",
            use_container_width=True,
            hide_index=True,
            disabled=[c for c in day_columns(policy) if c != "Attendance"],
            column_config={
                "Meeting Link": st.column_config.LinkColumn("Meeting Link", display_text="Join Meeting"),
                "Attendance": st.column_config.SelectboxColumn(
                    "Attendance", options=list(ATTENDANCE_STATUSES), required=True),
            },
        )
        changed = apply_attendance_edits(date_str, day_meetings, edited) or changed

    # counts above were drawn before the edit
    if changed:
        st.rerun()


# ──────────────────────────────────────────────────────────────────────────────
# UI
# ──────────────────────────────────────────────────────────────────────────────
state = st.session_state.scheduler
if state.view == OVERVIEW and state.has_schedule:
    render_overview(state)
else:
    render_calendar(state)

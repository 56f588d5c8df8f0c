import logging

import streamlit as st

from cgpa_analyser.backend_logic import (
    Outcome,
    ProjectionStatus,
    dashboard_summary,
    format_credits,
    plan,
    required_average,
)
from cgpa_analyser.config import (
    CREDIT_INPUT_STEP,
    GRADE_POINT_STEP,
    LOG_LEVEL,
    MAX_GP,
)
from cgpa_analyser.course_book import CourseBook
from cgpa_analyser.io_csv import read_courses_csv, write_courses_csv
from cgpa_analyser.logging_config import setup_logging

setup_logging(level=LOG_LEVEL)
logger = logging.getLogger("cgpa_analyser.app")

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="Smart CGPA Analyser | Target & Semester Planner",
    page_icon="🎓",
    layout="wide",
)

st.title("🎓 Smart CGPA Analyser")
st.write(
    "Enter your courses with their credit hours and grade points to see your "
    f"cumulative GPA on a {MAX_GP} scale, then plan what you need next semester "
    "and across the rest of your degree."
)


def _book() -> CourseBook:
    return st.session_state["course_book"]


def _widget_keys(entry_id: int):
    return f"name_{entry_id}", f"credits_{entry_id}", f"gp_{entry_id}"


def _forget_row_widgets(book: CourseBook) -> None:
    for entry in book:
        for key in _widget_keys(entry.entry_id):
            st.session_state.pop(key, None)


def _replace_book(new_book: CourseBook) -> None:
    _forget_row_widgets(_book())
    st.session_state["course_book"] = new_book


if "course_book" not in st.session_state:
    book = CourseBook()
    book.load_demo()
    st.session_state["course_book"] = book

book = _book()


# ------------------------
# Row callbacks
# ------------------------
def on_row_input(entry_id: int) -> None:
    name_key, credits_key, gp_key = _widget_keys(entry_id)
    entry = _book().update(
        entry_id,
        name=st.session_state.get(name_key, ""),
        credit_hours=st.session_state.get(credits_key),
        grade_point=st.session_state.get(gp_key),
    )
    # write the clamped values back into the inputs
    st.session_state[credits_key] = entry.credit_hours
    st.session_state[gp_key] = entry.grade_point


def on_remove(entry_id: int) -> None:
    _book().remove(entry_id)
    for key in _widget_keys(entry_id):
        st.session_state.pop(key, None)


def on_add() -> None:
    _book().add()


def on_load_demo() -> None:
    demo = CourseBook()
    demo.load_demo()
    _replace_book(demo)


def on_clear() -> None:
    _replace_book(CourseBook())


# ------------------------
# 1. Courses
# ------------------------
st.subheader("1. Enter your courses")

uploaded_csv = st.file_uploader(
    "Optionally upload a courses CSV (Course, Credits, Grade Point)",
    type=["csv"],
    key="courses_csv",
)

upload_error = None
if uploaded_csv is not None:
    signature = (uploaded_csv.name, uploaded_csv.size)
    if st.session_state.get("loaded_csv") != signature:
        try:
            _replace_book(read_courses_csv(uploaded_csv))
            st.session_state["loaded_csv"] = signature
        except ValueError as e:
            logger.warning(f"Rejected course CSV {uploaded_csv.name}: {e}")
            upload_error = str(e)
        book = _book()

if upload_error:
    st.error(f"Courses CSV error: {upload_error}")

if book.is_empty:
    st.info("No courses added yet. Click **Add Course** to get started.")
else:
    header = st.columns([4, 2, 2, 2, 2])
    for col, label in zip(header, ["Course / Semester", "Credit Hours", "Grade Point",
                                   "Quality Pts", ""]):
        col.markdown(f"**{label}**")

    for row in book.rows():
        entry_id = row["id"]
        name_key, credits_key, gp_key = _widget_keys(entry_id)
        st.session_state.setdefault(name_key, row["name"])
        st.session_state.setdefault(credits_key, row["credit_hours"])
        st.session_state.setdefault(gp_key, row["grade_point"])

        c_name, c_credits, c_gp, c_qp, c_remove = st.columns([4, 2, 2, 2, 2])
        with c_name:
            st.text_input(
                "Course / Semester",
                key=name_key,
                placeholder="e.g. Math 101 / Sem 1",
                label_visibility="collapsed",
                on_change=on_row_input,
                args=(entry_id,),
            )
        with c_credits:
            st.number_input(
                "Credit Hours",
                key=credits_key,
                step=CREDIT_INPUT_STEP,
                placeholder="3",
                label_visibility="collapsed",
                on_change=on_row_input,
                args=(entry_id,),
            )
        with c_gp:
            st.number_input(
                "Grade Point",
                key=gp_key,
                step=GRADE_POINT_STEP,
                format="%.2f",
                placeholder="4.0",
                label_visibility="collapsed",
                on_change=on_row_input,
                args=(entry_id,),
            )
        with c_qp:
            st.markdown(row["quality_points"])
        with c_remove:
            st.button("Remove", key=f"remove_{entry_id}", on_click=on_remove, args=(entry_id,))

b1, b2, b3, _ = st.columns([1, 1, 1, 5])
with b1:
    st.button("➕ Add Course", type="primary", on_click=on_add)
with b2:
    st.button("Load example", on_click=on_load_demo)
with b3:
    st.button("Clear all", on_click=on_clear)

totals = book.totals()
summary = dashboard_summary(totals)

if not book.is_empty:
    st.caption(f"Total: {summary['credits']} credits · {summary['quality_points']} quality points")
    st.download_button(
        "Download courses as CSV",
        data=write_courses_csv(book),
        file_name="courses.csv",
        mime="text/csv",
    )


# ------------------------
# Overview
# ------------------------
st.markdown("---")
st.subheader("Current position")

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Total credits", summary["credits"])
    st.progress(summary["credits_fraction"])
with col2:
    st.metric("Quality points", summary["quality_points"])
    st.progress(summary["quality_points_fraction"])
with col3:
    st.metric("CGPA", summary["cgpa"])
    st.progress(summary["cgpa_fraction"])
with col4:
    st.metric("Letter grade", summary["letter"])


def show_requirement(result, label: str) -> None:
    st.metric(label, result.display)
    if result.outcome is Outcome.NOT_ACHIEVABLE:
        st.error(f"{result.badge}: {result.message}")
    elif result.outcome in (Outcome.ACHIEVABLE, Outcome.ALREADY_ACHIEVED):
        st.success(f"{result.badge}: {result.message}")
    else:
        st.caption(result.message)


# ------------------------
# 2. Next semester target
# ------------------------
st.markdown("---")
st.subheader("2. Target planner: next semester")

t1, t2, t3 = st.columns([1, 1, 2])
with t1:
    goal_cgpa = st.number_input("Goal CGPA", value=None, min_value=0.0, max_value=MAX_GP,
                                step=0.01, format="%.2f", key="goal_cgpa")
with t2:
    next_credits = st.number_input("Next semester credits", value=None, min_value=0.0,
                                   step=CREDIT_INPUT_STEP, key="next_credits")
with t3:
    target_result = required_average(
        totals.total_credits, totals.total_quality_points, goal_cgpa, next_credits
    )
    show_requirement(target_result, "Required GPA next semester")


# ------------------------
# 3. Multi-semester planner
# ------------------------
st.markdown("---")
st.subheader("3. Semester planner")

s1, s2, s3, s4, s5 = st.columns(5)
with s1:
    total_sems = st.number_input("Total semesters", value=None, min_value=0, step=1,
                                 key="sp_total_sems")
with s2:
    completed_sems = st.number_input("Completed semesters", value=None, min_value=0, step=1,
                                     key="sp_completed_sems")
with s3:
    credits_per_sem = st.number_input("Credits per semester", value=None, min_value=0.0,
                                      step=CREDIT_INPUT_STEP, key="sp_credits_per_sem")
with s4:
    assumed_gpa = st.number_input("Assumed GPA per semester", value=None, min_value=0.0,
                                  max_value=MAX_GP, step=0.01, format="%.2f",
                                  key="sp_assumed_gpa")
with s5:
    target_cgpa = st.number_input("Target CGPA", value=None, min_value=0.0, max_value=MAX_GP,
                                  step=0.01, format="%.2f", key="sp_target_cgpa")

semester_plan = plan(
    totals.total_credits,
    totals.total_quality_points,
    totals.cumulative_average,
    total_sems,
    completed_sems,
    credits_per_sem,
    assumed_average=assumed_gpa,
    target_average=target_cgpa,
)

if semester_plan is None:
    st.caption("Enter total semesters and credits per semester to start planning.")
else:
    st.markdown(
        f"**Remaining semesters:** {semester_plan.remaining_periods} "
        f"({format_credits(semester_plan.remaining_credits)} credits)"
    )
    p1, p2 = st.columns(2)
    with p1:
        projection = semester_plan.projection
        st.metric("Projected final CGPA", projection.display)
        if projection.status is ProjectionStatus.UNSET:
            st.caption(projection.message)
        else:
            st.info(projection.message)
    with p2:
        show_requirement(semester_plan.requirement, "Required GPA per remaining semester")


st.header("FAQ")

st.subheader("How is CGPA calculated?")
st.write(
    "Each course contributes credit hours × grade point quality points. Your CGPA is the "
    "total quality points divided by the total credit hours. Rows missing a value, or with "
    "zero credits, are left out."
)

st.subheader("What data do you collect or store?")
st.write(
    "Nothing is stored. Courses you type or upload live only in your browser session "
    "and are cleared when you refresh or close the page."
)

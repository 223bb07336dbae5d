"""
pages/1_Admin_Dashboard.py – Admin Portal.

System overview (user counts, agent health, department and skill-gap
charts, monthly trend), user management with search and department
filter, the manager → report hierarchy, and dataset consistency checks.
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import html as _html

import streamlit as st
import plotly.graph_objects as go
import plotly.express as px
import pandas as pd

from learning_hub.analytics import (
    ALL_DEPARTMENTS,
    agent_health,
    departments,
    filter_employees,
    is_active,
    overall_progress,
    status_counts,
    system_stats,
    team_hierarchy,
)
from learning_hub.auth import View
from learning_hub.guardrails import GuardrailLevel, GuardrailsPipeline
from learning_hub.mock_data import (
    ASSESSMENTS,
    COURSE_CATALOG,
    DEPARTMENT_PROGRESS,
    EMPLOYEES,
    MONTHLY_PROGRESS,
    SKILL_GAP_ANALYSIS,
    USERS,
)
from learning_hub.ui import (
    BLUE, GREEN, GREY, PURPLE, RED, TEAL, YELLOW,
    apply_theme,
    avatar,
    badge,
    card,
    get_auth_manager,
    get_settings_cached,
    progress_bar,
    render_sidebar,
    require_view,
    show_restore_error,
)

# ─── Page config ─────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Admin Portal – Learning Hub",
    page_icon="🛡️",
    layout="wide",
)
apply_theme()

HEALTH_COLOUR = {"healthy": GREEN, "warning": YELLOW, "error": RED}
LEVEL_COLOUR = {GuardrailLevel.BLOCK: RED, GuardrailLevel.WARN: YELLOW, GuardrailLevel.INFO: BLUE}

settings = get_settings_cached()
auth = get_auth_manager()
show_restore_error(auth)
require_view(auth, View.ADMIN)
render_sidebar(auth, View.ADMIN)

now = settings.dashboard.now()
window = settings.dashboard.active_window_days

st.markdown("## 🛡️ Admin Portal")
st.caption(f"Signed in as {auth.user.full_name} · activity measured against {now:%Y-%m-%d}")

tab_overview, tab_users, tab_teams, tab_courses, tab_checks = st.tabs([
    "📊 Overview", "👤 User Management", "🌳 Team Hierarchy", "📚 Course Catalogue", "✅ Dataset Checks",
])


# ─── Overview ─────────────────────────────────────────────────────────────────
with tab_overview:
    stats = system_stats(EMPLOYEES, USERS, now, window)
    k1, k2, k3, k4 = st.columns(4)
    k1.markdown(card("Employees", str(stats.total_users), BLUE), unsafe_allow_html=True)
    k2.markdown(card("Managers", str(stats.total_managers), PURPLE), unsafe_allow_html=True)
    k3.markdown(card("Active users", str(stats.active_users), GREEN, f"seen in the last {window} days"),
                unsafe_allow_html=True)
    k4.markdown(card("Completion rate", f"{stats.completion_rate:.0f}%", TEAL), unsafe_allow_html=True)

    st.markdown("#### Agent health")
    health_df = pd.DataFrame([
        {"Agent": a.name, "Status": a.status, "Latency": a.latency,
         "Processed": a.processed, "Errors": a.errors}
        for a in agent_health()
    ])
    hc = st.columns(len(health_df))
    for col, row in zip(hc, health_df.itertuples()):
        col.markdown(
            card(row.Agent, row.Status.title(), HEALTH_COLOUR[row.Status],
                 f"{row.Latency} · {row.Processed:,} processed · {row.Errors} errors"),
            unsafe_allow_html=True,
        )

    c_left, c_right = st.columns(2)
    with c_left:
        st.markdown("#### Department progress")
        dept_fig = go.Figure()
        for label, attr, colour in [
            ("Completed", "completed", GREEN),
            ("In progress", "in_progress", BLUE),
            ("Not started", "not_started", "#D1D5DB"),
        ]:
            dept_fig.add_trace(go.Bar(
                name=label,
                x=[d.department for d in DEPARTMENT_PROGRESS],
                y=[getattr(d, attr) for d in DEPARTMENT_PROGRESS],
                marker_color=colour,
            ))
        dept_fig.update_layout(barmode="stack", height=340, margin=dict(t=20, b=20),
                               legend=dict(orientation="h", y=-0.15))
        st.plotly_chart(dept_fig, use_container_width=True)

    with c_right:
        st.markdown("#### Skill gaps")
        gap_fig = go.Figure()
        gap_fig.add_trace(go.Bar(
            name="Current", y=[g.skill for g in SKILL_GAP_ANALYSIS],
            x=[g.current_level for g in SKILL_GAP_ANALYSIS],
            orientation="h", marker_color=BLUE,
        ))
        gap_fig.add_trace(go.Bar(
            name="Target", y=[g.skill for g in SKILL_GAP_ANALYSIS],
            x=[g.target_level for g in SKILL_GAP_ANALYSIS],
            orientation="h", marker_color="#BFDBFE",
            text=[f"gap {g.gap}" for g in SKILL_GAP_ANALYSIS], textposition="auto",
        ))
        gap_fig.update_layout(barmode="group", height=340, margin=dict(t=20, b=20),
                              legend=dict(orientation="h", y=-0.15))
        st.plotly_chart(gap_fig, use_container_width=True)

    st.markdown("#### Monthly trend")
    trend_df = pd.DataFrame([m.model_dump() for m in MONTHLY_PROGRESS]).melt(
        id_vars="month", var_name="Series", value_name="Items",
    )
    trend_fig = px.line(
        trend_df, x="month", y="Items", color="Series", markers=True,
        color_discrete_map={"completed": GREEN, "started": BLUE},
    )
    trend_fig.update_layout(height=320, margin=dict(t=20, b=20), xaxis_title="")
    st.plotly_chart(trend_fig, use_container_width=True)


# ─── User management ──────────────────────────────────────────────────────────
with tab_users:
    f1, f2 = st.columns([2, 1])
    search = f1.text_input("Search by name or department", key="admin_search")
    dept = f2.selectbox(
        "Department", [ALL_DEPARTMENTS] + departments(EMPLOYEES),
        format_func=lambda d: "All departments" if d == ALL_DEPARTMENTS else d,
        key="admin_dept",
    )
    rows = filter_employees(EMPLOYEES, dept, search)
    st.caption(f"{len(rows)} of {len(EMPLOYEES)} employees")

    if rows:
        users_df = pd.DataFrame([
            {
                "Name": e.full_name,
                "Email": e.email,
                "Department": e.department,
                "Level": e.current_level,
                "Progress": round(overall_progress(e)),
                "Completed": status_counts(e.learning_path).completed,
                "Active": "🟢" if is_active(e, now, window) else "⚪",
                "Last active": e.last_active.strftime("%Y-%m-%d %H:%M"),
            }
            for e in rows
        ])
        st.dataframe(
            users_df,
            use_container_width=True,
            hide_index=True,
            column_config={
                "Name":     st.column_config.TextColumn("Name", width="medium"),
                "Progress": st.column_config.ProgressColumn(
                    "Progress", min_value=0, max_value=100, format="%d%%"),
                "Active":   st.column_config.TextColumn("Active", width="small"),
            },
        )
    else:
        st.info("No employees match these filters.")


# ─── Team hierarchy ───────────────────────────────────────────────────────────
with tab_teams:
    for view in team_hierarchy(USERS, EMPLOYEES):
        mgr = view.manager
        with st.expander(f"{mgr.full_name} · {mgr.department} · {len(view.members)} reports",
                         expanded=True):
            st.markdown(
                f"""<div style="display:flex;gap:10px;align-items:center;margin-bottom:6px;">
                      {avatar(mgr.full_name, PURPLE)}
                      <div><b>{_html.escape(mgr.full_name)}</b><br/>
                      <span style="color:{GREY};font-size:0.8rem;">{_html.escape(mgr.email)}</span></div>
                    </div>""",
                unsafe_allow_html=True,
            )
            if not view.members:
                st.caption("No reports with a learning profile.")
            for member in view.members:
                name_col, bar_col = st.columns([1, 2])
                name_col.markdown(f"↳ **{_html.escape(member.full_name)}** · {member.current_level}")
                bar_col.markdown(progress_bar(overall_progress(member)), unsafe_allow_html=True)


# ─── Course catalogue ────────────────────────────────────────────────────────
with tab_courses:
    categories = sorted({c.category for c in COURSE_CATALOG})
    picked = st.multiselect("Category", categories, default=categories)
    courses_df = pd.DataFrame([
        {"Course": c.title, "Category": c.category, "Level": c.level.value.title(),
         "Hours": c.estimated_hours, "Rating": c.rating, "Enrolled": c.enrolled_count,
         "Completion %": c.completion_rate, "Skills": ", ".join(c.skills)}
        for c in COURSE_CATALOG if c.category in picked
    ])
    if courses_df.empty:
        st.info("No courses in the selected categories.")
    else:
        st.dataframe(courses_df, use_container_width=True, hide_index=True)
        st.caption(f"{len(courses_df)} courses · {int(courses_df['Enrolled'].sum()):,} enrolments")


# ─── Dataset checks ───────────────────────────────────────────────────────────
with tab_checks:
    result = GuardrailsPipeline().check_dataset(USERS, EMPLOYEES, ASSESSMENTS)
    if not result.violations:
        st.success(result.summary())
    else:
        b1, b2, b3 = st.columns(3)
        b1.markdown(card("Blocking", str(len(result.violations) - len(result.warnings) - len(result.infos)), RED),
                    unsafe_allow_html=True)
        b2.markdown(card("Warnings", str(len(result.warnings)), YELLOW), unsafe_allow_html=True)
        b3.markdown(card("Info", str(len(result.infos)), BLUE), unsafe_allow_html=True)
        for v in result.violations:
            st.markdown(
                f"{badge(v.level.value, LEVEL_COLOUR[v.level])} **{v.code}** "
                f"{_html.escape(v.message)} <span style='color:{GREY};'>({_html.escape(v.field)})</span>",
                unsafe_allow_html=True,
            )

    st.markdown("#### Configuration")
    for service, status in settings.status_summary().items():
        st.markdown(f"**{service}:** {status}")

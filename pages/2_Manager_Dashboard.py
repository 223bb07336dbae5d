"""
pages/2_Manager_Dashboard.py – Manager Portal.

Team summary for the signed-in manager's direct reports: KPI cards, each
member's progress and risk with quick actions, the progress distribution,
and a downloadable PDF team report.
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import html as _html

import streamlit as st
import plotly.graph_objects as go
import pandas as pd

from learning_hub.analytics import (
    overall_progress,
    progress_distribution,
    risk_level,
    skill_gaps,
    status_counts,
    team_members,
    team_stats,
)
from learning_hub.auth import View
from learning_hub.mock_data import EMPLOYEES, USERS
from learning_hub.models import ItemStatus
from learning_hub.reports import generate_team_report_pdf, quick_action, send_reminder
from learning_hub.ui import (
    BLUE, GREEN, GREY, RED, TEAL, YELLOW,
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
    page_title="Manager Portal – Learning Hub",
    page_icon="👥",
    layout="wide",
)
apply_theme()

RISK_COLOUR = {"High": RED, "Medium": YELLOW, "Low": GREEN}
BUCKET_COLOUR = {"80-100%": GREEN, "60-79%": BLUE, "40-59%": YELLOW, "0-39%": RED}

settings = get_settings_cached()
auth = get_auth_manager()
show_restore_error(auth)
require_view(auth, View.MANAGER)
render_sidebar(auth, View.MANAGER)

manager = auth.user
team = team_members(manager, USERS, EMPLOYEES)
members = team.members
stats = team_stats(members)

st.markdown(f"## 👥 {_html.escape(manager.department)} team")
st.caption(f"{manager.full_name} · {stats.total_members} direct reports")

# ─── KPI row ──────────────────────────────────────────────────────────────────
k1, k2, k3, k4 = st.columns(4)
k1.markdown(card("Team members", str(stats.total_members), BLUE), unsafe_allow_html=True)
k2.markdown(card("Avg progress", f"{stats.average_progress:.0f}%", TEAL), unsafe_allow_html=True)
k3.markdown(card("Completed items", str(stats.completed_items), GREEN), unsafe_allow_html=True)
k4.markdown(card("At risk", str(stats.at_risk_employees), RED, "below 40% progress"),
            unsafe_allow_html=True)

# ─── Team-wide quick actions ──────────────────────────────────────────────────
st.markdown("#### Quick actions")
qa1, qa2, qa3 = st.columns(3)
if qa1.button("📝 Start team assessment", use_container_width=True):
    st.success(quick_action("start-assessment"))
if qa2.button("🎯 Set team goals", use_container_width=True):
    st.info(quick_action("set-goals"))
with qa3:
    if members:
        st.download_button(
            "📄 Download team report (PDF)",
            data=generate_team_report_pdf(manager, members),
            file_name=f"team_report_{manager.username}.pdf",
            mime="application/pdf",
            use_container_width=True,
        )
    else:
        st.button("📄 Download team report (PDF)", disabled=True, use_container_width=True)

if not members:
    st.info("No direct reports are assigned to you yet.")
    st.stop()

left, right = st.columns([1.6, 1])

# ─── Members ──────────────────────────────────────────────────────────────────
with left:
    st.markdown("#### Team members")
    for member in members:
        risk = risk_level(member)
        counts = status_counts(member.learning_path)
        with st.container(border=True):
            head, tag = st.columns([4, 1])
            head.markdown(
                f"""<div style="display:flex;gap:10px;align-items:center;">
                      {avatar(member.full_name)}
                      <div><b>{_html.escape(member.full_name)}</b><br/>
                      <span style="color:{GREY};font-size:0.8rem;">
                        {member.current_level} → {member.target_level}</span></div>
                    </div>""",
                unsafe_allow_html=True,
            )
            tag.markdown(badge(f"{risk} risk", RISK_COLOUR[risk]), unsafe_allow_html=True)
            st.markdown(progress_bar(overall_progress(member)), unsafe_allow_html=True)
            st.caption(
                f"{counts.completed} completed · {counts.in_progress} in progress · "
                f"gaps: {', '.join(skill_gaps(member, settings.dashboard.skill_gap_threshold)) or 'none'}"
            )
            active = member.items_with_status(ItemStatus.IN_PROGRESS)
            if active:
                st.markdown("Working on: " + ", ".join(f"{i.title} ({i.progress}%)" for i in active))

            b1, b2 = st.columns(2)
            if b1.button("✉️ Send reminder", key=f"remind_{member.username}", use_container_width=True):
                if settings.smtp.is_configured:
                    ok, msg = send_reminder(member, settings.smtp)
                    (st.success if ok else st.error)(msg)
                else:
                    st.success(quick_action("send-reminder", member))
            if b2.button("📅 Schedule 1:1", key=f"meet_{member.username}", use_container_width=True):
                st.success(quick_action("schedule-meeting", member))

# ─── Distribution & table ─────────────────────────────────────────────────────
with right:
    st.markdown("#### Progress distribution")
    dist = progress_distribution(members)
    fig = go.Figure(go.Bar(
        x=list(dist.keys()), y=list(dist.values()),
        marker_color=[BUCKET_COLOUR[k] for k in dist],
        text=list(dist.values()), textposition="outside",
    ))
    fig.update_layout(height=300, margin=dict(t=20, b=20),
                      yaxis=dict(title="Members", dtick=1))
    st.plotly_chart(fig, use_container_width=True)

    st.markdown("#### Summary")
    df = pd.DataFrame([
        {
            "Name": m.full_name,
            "Progress": round(overall_progress(m)),
            "Risk": risk_level(m),
            "Last active": m.last_active.strftime("%Y-%m-%d"),
        }
        for m in members
    ])
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Progress": st.column_config.ProgressColumn("Progress", min_value=0, max_value=100,
                                                        format="%d%%"),
        },
    )

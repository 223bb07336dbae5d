# streamlit_app.py – Learning Hub
# Sign-in gate and Learner Portal; manager and admin portals live in pages/

import html as _html
import sys
from pathlib import Path

# make src/ importable without installing the package
sys.path.insert(0, str(Path(__file__).parent / "src"))

import streamlit as st
import plotly.graph_objects as go
import pandas as pd

from learning_hub.analytics import (
    learning_stages,
    overall_progress,
    skill_gaps,
    status_counts,
    team_members,
)
from learning_hub.assessment_agent import (
    ASSESSMENT_CATALOGUE,
    QuizSession,
    format_time,
    score_assessment,
)
from learning_hub.auth import View, default_view
from learning_hub.learning_path import (
    PrerequisiteCycleError,
    is_unlocked,
    prerequisite_title,
    topological_order,
)
from learning_hub.mock_data import (
    ASSESSMENTS,
    EMPLOYEES,
    USERS,
    EmployeeNotFoundError,
    course_titles,
    get_employee_or_raise,
)
from learning_hub.models import Employee, ItemStatus, PublicUser
from learning_hub.profile_agent import ProfileAgent
from learning_hub.recommender_agent import RecommenderAgent, start_course_assessment
from learning_hub.tracker_agent import InsightKind, RiskLevel, TrackerAgent
from learning_hub.ui import (
    BLUE, GREEN, GREY, PURPLE, RED, TEAL, YELLOW,
    VIEW_PAGES,
    apply_theme,
    avatar,
    badge,
    card,
    get_auth_manager,
    get_settings_cached,
    progress_bar,
    render_sidebar,
    show_restore_error,
    stage_strip,
)

# ─── Page config ─────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Learning Hub",
    page_icon="🎓",
    layout="wide",
)
apply_theme()

STATUS_COLOUR = {
    ItemStatus.COMPLETED:   GREEN,
    ItemStatus.IN_PROGRESS: BLUE,
    ItemStatus.NOT_STARTED: GREY,
}
RISK_COLOUR = {RiskLevel.LOW: GREEN, RiskLevel.MEDIUM: YELLOW, RiskLevel.HIGH: RED}
INSIGHT_ICON = {InsightKind.POSITIVE: "✅", InsightKind.WARNING: "⚠️", InsightKind.SUGGESTION: "💡"}

DEMO_ACCOUNTS = [
    ("Admin",    "admin1",   "admin123"),
    ("Manager",  "manager1", "manager123"),
    ("Employee", "emp1",     "emp123"),
]

settings = get_settings_cached()
auth = get_auth_manager()
show_restore_error(auth)


# ─── Sign-in ──────────────────────────────────────────────────────────────────

def _after_login() -> None:
    st.session_state["landed"] = True
    target = default_view(auth.user)
    if target != View.LEARNER:
        st.switch_page(VIEW_PAGES[target])
    st.rerun()


def render_login() -> None:
    _, centre, _ = st.columns([1, 1.3, 1])
    with centre:
        st.markdown("## 🎓 Learning Hub")
        st.caption("Skills development for every role: learners, managers and administrators.")

        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign in", type="primary", use_container_width=True)
        if submitted:
            if auth.login(username.strip(), password):
                _after_login()
            else:
                st.error("Invalid username or password.")

        st.markdown("**Demo accounts**")
        cols = st.columns(len(DEMO_ACCOUNTS))
        for col, (label, user, pwd) in zip(cols, DEMO_ACCOUNTS):
            with col:
                if st.button(label, key=f"demo_{user}", use_container_width=True):
                    if auth.login(user, pwd):
                        _after_login()
                st.caption(f"`{user}` / `{pwd}`")


if not auth.is_authenticated:
    render_login()
    st.stop()

# A restored session lands on the role's home portal once per browser session
if "landed" not in st.session_state:
    st.session_state["landed"] = True
    home = default_view(auth.user)
    if home != View.LEARNER:
        st.switch_page(VIEW_PAGES[home])

render_sidebar(auth, View.LEARNER)
user: PublicUser = auth.user


# ─── Tabs ─────────────────────────────────────────────────────────────────────

def tab_overview(emp: Employee) -> None:
    counts = status_counts(emp.learning_path)
    gaps = skill_gaps(emp, settings.dashboard.skill_gap_threshold)
    c1, c2, c3, c4 = st.columns(4)
    c1.markdown(card("Overall progress", f"{overall_progress(emp):.0f}%", BLUE), unsafe_allow_html=True)
    c2.markdown(card("Completed", str(counts.completed), GREEN, f"of {counts.total} items"), unsafe_allow_html=True)
    c3.markdown(card("In progress", str(counts.in_progress), YELLOW), unsafe_allow_html=True)
    c4.markdown(card("Skill gaps", str(len(gaps)), RED, ", ".join(gaps) or "none"), unsafe_allow_html=True)

    st.markdown("#### Your learning journey")
    st.markdown(stage_strip(learning_stages(emp)), unsafe_allow_html=True)

    st.markdown("#### Currently learning")
    active = emp.items_with_status(ItemStatus.IN_PROGRESS)
    if not active:
        st.info("Nothing in progress. Pick your next item from the Learning Path tab.")
    for item in active:
        st.markdown(f"**{_html.escape(item.title)}** · {item.estimated_hours:g}h")
        st.markdown(progress_bar(item.progress), unsafe_allow_html=True)

    st.markdown("#### Skills")
    st.markdown(" ".join(badge(s, TEAL) for s in emp.skills), unsafe_allow_html=True)


def tab_profile(emp: Employee) -> None:
    # analysis is drawn once per learner per browser session
    cache = st.session_state.setdefault("profile_analysis", {})
    if emp.username not in cache:
        cache[emp.username] = ProfileAgent(seed=settings.dashboard.agent_seed).analyse(emp)
    analysis = cache[emp.username]

    left, right = st.columns([1, 1.4])
    with left:
        st.markdown("#### Profile")
        st.markdown(
            f"""
            <div style="display:flex;gap:12px;align-items:center;">
              {avatar(emp.full_name)}
              <div><b>{_html.escape(emp.full_name)}</b><br/>
                <span style="color:{GREY};">{_html.escape(emp.department)} · {_html.escape(emp.email)}</span>
              </div>
            </div>
            """,
            unsafe_allow_html=True,
        )
        st.markdown(f"**Current level:** {emp.current_level}")
        st.markdown(f"**Target level:** {emp.target_level}")
        st.markdown(f"**Completed courses:** {len(emp.completed_courses)}")
        for title in course_titles(emp.completed_courses):
            st.markdown(f"- {_html.escape(title)}")
        if emp.in_progress_courses:
            st.caption("In progress: " + ", ".join(course_titles(emp.in_progress_courses)))

        st.markdown("#### AI analysis")
        for insight in analysis.top_insights:
            st.markdown(f"**{insight.name}** · demand {insight.market_demand}%")
            st.markdown(progress_bar(insight.proficiency, PURPLE), unsafe_allow_html=True)
        st.info(analysis.focus_message)

    with right:
        st.markdown("#### Assessment scores")
        if not emp.assessment_scores:
            st.caption("No assessments taken yet.")
            return
        skills = list(emp.assessment_scores)
        scores = [emp.assessment_scores[s] for s in skills]
        threshold = settings.dashboard.skill_gap_threshold
        fig = go.Figure(go.Bar(
            x=skills, y=scores,
            marker_color=[RED if s < threshold else GREEN for s in scores],
            text=scores, textposition="outside",
        ))
        fig.add_hline(y=threshold, line_dash="dash", line_color=GREY,
                      annotation_text=f"gap threshold ({threshold})")
        fig.update_layout(height=340, margin=dict(t=20, b=20), yaxis=dict(range=[0, 110]))
        st.plotly_chart(fig, use_container_width=True)


def _render_quiz() -> None:
    quiz: QuizSession = st.session_state["quiz"]
    st.markdown(f"#### {st.session_state.get('quiz_title', 'Skills assessment')}")
    question = quiz.current_question
    if question is None:
        st.success("Assessment complete. Results by skill:")
        for result in quiz.results:
            colour = {"strong": GREEN, "moderate": YELLOW, "weak": RED}[result.band]
            st.markdown(f"**{result.skill}** {badge(result.band, colour)}", unsafe_allow_html=True)
            st.markdown(progress_bar(result.score, colour), unsafe_allow_html=True)
        if st.button("Close results"):
            st.session_state.pop("quiz", None)
            st.session_state.pop("quiz_title", None)
            st.rerun()
        return

    st.markdown(
        f"Question {quiz.current_index + 1} of {len(quiz.questions)} · "
        f"⏱ {format_time(quiz.time_remaining)} · {question.difficulty.value} · {question.skill}"
    )
    st.markdown(progress_bar(quiz.progress_pct, BLUE, show_pct=False), unsafe_allow_html=True)
    st.markdown(f"**{question.text}**")
    choice = st.radio(
        "Answer", range(len(question.options)),
        format_func=lambda i: question.options[i],
        key=f"quiz_q{question.id}", index=None, label_visibility="collapsed",
    )
    label = "Finish" if quiz.current_index == len(quiz.questions) - 1 else "Next"
    if st.button(label, disabled=choice is None, type="primary"):
        quiz.answer(choice)
        st.rerun()


def tab_assessment(emp: Employee) -> None:
    if "quiz" in st.session_state:
        _render_quiz()
        return

    st.markdown("#### Skill assessments")
    cols = st.columns(2)
    for idx, entry in enumerate(ASSESSMENT_CATALOGUE):
        with cols[idx % 2]:
            with st.container(border=True):
                st.markdown(f"**{entry.title}**  {badge(entry.difficulty.value, PURPLE)}",
                            unsafe_allow_html=True)
                st.caption(entry.description)
                st.markdown(
                    f"{entry.category} · {entry.estimated_time} min · "
                    f"{badge(entry.status.label, STATUS_COLOUR[entry.status])}"
                    + (f" · score **{entry.score}%**" if entry.score is not None else ""),
                    unsafe_allow_html=True,
                )
                if st.button(entry.action_label, key=f"start_{entry.id}"):
                    st.session_state["quiz"] = QuizSession()
                    st.session_state["quiz_title"] = entry.title
                    st.rerun()

    st.markdown("#### Practice tests")
    for assessment in ASSESSMENTS:
        with st.expander(f"{assessment.title} · pass mark {assessment.passing_score}%"):
            with st.form(f"practice_{assessment.id}"):
                picks = [
                    st.radio(q.text, range(len(q.options)),
                             format_func=lambda i, q=q: q.options[i], key=f"{assessment.id}_{q.id}")
                    for q in assessment.questions
                ]
                submitted = st.form_submit_button("Submit")
            if submitted:
                result = score_assessment(assessment, picks)
                outcome = st.success if result.passed else st.warning
                outcome(f"{result.correct}/{result.total} correct · {result.score_pct}% · "
                        f"{'passed' if result.passed else 'not passed'}")


def tab_recommendations(emp: Employee) -> None:
    notice = st.session_state.pop("quiz_notice", None)
    if notice:
        st.success(f"{notice} is ready. Open the Assessment tab to begin.")
    recs = RecommenderAgent().recommend(
        skill_gaps(emp, settings.dashboard.skill_gap_threshold), emp.skills,
    )
    st.info(recs.summary)
    band_colour = {"excellent": GREEN, "strong": BLUE, "fair": YELLOW, "low": GREY}
    for course in recs.courses:
        with st.container(border=True):
            head, score = st.columns([4, 1])
            head.markdown(f"**{course.title}** · {course.level} · {course.estimated_hours:g}h · ⭐ {course.rating}")
            score.markdown(badge(f"{course.relevance_score}% match", band_colour[course.relevance_band]),
                           unsafe_allow_html=True)
            st.caption(course.description)
            st.markdown(" ".join(
                badge(t.display, RED if t.kind == "gap" else TEAL if t.kind == "current" else GREY)
                for t in recs.tagged_skills[course.id]
            ), unsafe_allow_html=True)
            st.markdown(f"_Why:_ {course.reason}")
            st.caption(f"{course.enrolled_count:,} enrolled")
            if course.assessment_id and st.button("Start Assignment", key=f"assign_{course.id}"):
                entry, quiz = start_course_assessment(course)
                if entry is None:
                    st.warning("No assessment is linked to this course yet.")
                else:
                    st.session_state["quiz"] = quiz
                    st.session_state["quiz_title"] = entry.title
                    st.session_state["quiz_notice"] = entry.title
                    st.rerun()

    st.markdown("#### Suggested path")
    for step, course in enumerate(recs.suggested_path, start=1):
        st.markdown(f"{step}. {course.title} ({course.estimated_hours:g}h)")
    st.markdown(f"**Total:** {recs.suggested_path_hours:g} hours")


def tab_tracker(emp: Employee) -> None:
    report = TrackerAgent().track(emp)
    a = report.analytics
    c1, c2, c3, c4 = st.columns(4)
    c1.markdown(card("Weekly hours", f"{a.weekly_hours:g}", BLUE), unsafe_allow_html=True)
    c2.markdown(card("Avg session", f"{a.average_session_min} min", TEAL), unsafe_allow_html=True)
    c3.markdown(card("Streak", f"{a.streak_days} days", GREEN), unsafe_allow_html=True)
    c4.markdown(card("Risk", a.risk_level.value.title(), RISK_COLOUR[a.risk_level],
                     f"~{a.weeks_to_complete} weeks to complete"), unsafe_allow_html=True)

    st.markdown(
        f"**{report.completed_items}** of **{report.total_items}** items completed · "
        f"**{report.in_progress_items}** in progress · last active {report.last_active[:10]}"
    )
    st.markdown(progress_bar(report.overall_progress), unsafe_allow_html=True)

    st.markdown("#### Insights")
    for insight in report.insights:
        st.markdown(f"{INSIGHT_ICON[insight.kind]} **{insight.title}**: {insight.message}")

    st.markdown("#### Current items")
    for item in report.current_items:
        st.markdown(f"**{_html.escape(item.title)}**")
        st.markdown(progress_bar(item.progress), unsafe_allow_html=True)


def tab_learning_path(emp: Employee) -> None:
    items = emp.learning_path
    try:
        order = topological_order(items)
    except PrerequisiteCycleError as exc:
        st.error(f"This learning path cannot be ordered: {exc}")
        return
    by_id = {item.id: item for item in items}

    for step, item_id in enumerate(order, start=1):
        item = by_id[item_id]
        with st.container(border=True):
            head, status = st.columns([4, 1])
            lock = "" if is_unlocked(items, item) else "🔒 "
            head.markdown(f"{step}. {lock}**{_html.escape(item.title)}** · {item.type.value} · "
                          f"{item.estimated_hours:g}h")
            status.markdown(badge(item.status.label, STATUS_COLOUR[item.status]), unsafe_allow_html=True)
            st.markdown(progress_bar(item.progress), unsafe_allow_html=True)
            prereq = prerequisite_title(items, item)
            if prereq:
                st.caption(f"Requires: {prereq}")
            elif item.prerequisite:
                st.caption(f"Requires completed course: {item.prerequisite}")
            if item.skills:
                st.markdown(" ".join(badge(s, TEAL) for s in item.skills), unsafe_allow_html=True)

    if items:
        df = pd.DataFrame([{"Item": i.title, "Hours": i.estimated_hours, "Status": i.status.label}
                           for i in items])
        fig = go.Figure(go.Bar(
            x=df["Hours"], y=df["Item"], orientation="h",
            marker_color=[STATUS_COLOUR[i.status] for i in items],
            text=df["Status"], textposition="auto",
        ))
        fig.update_layout(height=60 + 45 * len(items), margin=dict(t=10, b=10),
                          yaxis=dict(autorange="reversed"), xaxis_title="Estimated hours")
        st.plotly_chart(fig, use_container_width=True)


def tab_team(emp: Employee) -> None:
    team = team_members(user, USERS, EMPLOYEES)
    if team.manager is not None:
        st.markdown("#### Your manager")
        st.markdown(
            f"""<div style="display:flex;gap:12px;align-items:center;">
                  {avatar(team.manager.full_name, BLUE)}
                  <div><b>{_html.escape(team.manager.full_name)}</b><br/>
                  <span style="color:{GREY};">{_html.escape(team.manager.email)}</span></div>
                </div>""",
            unsafe_allow_html=True,
        )
    st.markdown("#### Colleagues")
    if not team.members:
        st.caption("No colleagues share your manager.")
    for member in team.members:
        with st.container(border=True):
            st.markdown(f"**{_html.escape(member.full_name)}** · {member.current_level}")
            st.markdown(progress_bar(overall_progress(member)), unsafe_allow_html=True)
            st.markdown(" ".join(badge(s, TEAL) for s in member.skills[:4]), unsafe_allow_html=True)


# ─── Learner Portal ───────────────────────────────────────────────────────────

st.markdown(f"## Welcome back, {_html.escape(user.full_name.split()[0])}")

try:
    employee = get_employee_or_raise(user.username)
except EmployeeNotFoundError:
    st.error("Employee data not found.")
    st.stop()

(t_overview, t_profile, t_assess, t_recs,
 t_tracker, t_path, t_team) = st.tabs([
    "Overview", "Profile Analysis", "Assessment", "Recommendations",
    "Progress Tracker", "Learning Path", "Team Members",
])
with t_overview:
    tab_overview(employee)
with t_profile:
    tab_profile(employee)
with t_assess:
    tab_assessment(employee)
with t_recs:
    tab_recommendations(employee)
with t_tracker:
    tab_tracker(employee)
with t_path:
    tab_learning_path(employee)
with t_team:
    tab_team(employee)

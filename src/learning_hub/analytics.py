"""
analytics.py – Derived statistics behind every dashboard
========================================================
Pure functions over the static dataset.  Nothing here mutates a model or
touches the session; views pass in the records they are allowed to see.

Learner      overall_progress, status_counts, skill_gaps, learning_stages
Manager      team_members, team_stats, risk_level, progress_distribution
Admin        filter_employees, departments, is_active, system_stats,
             team_hierarchy, agent_health
Display      initials, progress_band
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Sequence

from learning_hub.models import (
    Employee,
    ItemStatus,
    LearningPathItem,
    PublicUser,
    Role,
    UserRecord,
)

ALL_DEPARTMENTS = "all"


# ─── Learner ──────────────────────────────────────────────────────────────────

def overall_progress(employee: Employee) -> float:
    """Arithmetic mean of item progress; 0.0 for an empty path."""
    items = employee.learning_path
    if not items:
        return 0.0
    return sum(item.progress for item in items) / len(items)


@dataclass
class StatusCounts:
    completed:    int
    in_progress:  int
    not_started:  int

    @property
    def total(self) -> int:
        return self.completed + self.in_progress + self.not_started


def status_counts(items: Sequence[LearningPathItem]) -> StatusCounts:
    return StatusCounts(
        completed   = sum(1 for i in items if i.status == ItemStatus.COMPLETED),
        in_progress = sum(1 for i in items if i.status == ItemStatus.IN_PROGRESS),
        not_started = sum(1 for i in items if i.status == ItemStatus.NOT_STARTED),
    )


def skill_gaps(employee: Employee, threshold: int = 70) -> list[str]:
    """Skills whose assessed score is strictly below *threshold*."""
    return [skill for skill, score in employee.assessment_scores.items() if score < threshold]


@dataclass
class Stage:
    title:   str
    status:  str   # "completed" | "current" | "pending"


def learning_stages(employee: Employee) -> list[Stage]:
    """Five-step journey strip shown on the learner overview."""
    p = overall_progress(employee)

    if p > 20:
        recommendations = "completed"
    elif p > 0:
        recommendations = "current"
    else:
        recommendations = "pending"

    return [
        Stage("Profile",         "completed"),
        Stage("Assessment",      "completed" if p > 0 else "current"),
        Stage("Recommendations", recommendations),
        Stage("Learning",        "current" if p > 20 else "pending"),
        Stage("Completion",      "current" if p > 90 else "pending"),
    ]


# ─── Team views ───────────────────────────────────────────────────────────────

@dataclass
class TeamView:
    manager:  Optional[UserRecord | PublicUser]
    members:  list[Employee] = field(default_factory=list)


def team_members(
    user: Optional[PublicUser],
    users: Sequence[UserRecord],
    employees: Sequence[Employee],
) -> TeamView:
    """
    Employees see their manager and the colleagues sharing that manager;
    managers see their direct reports; everyone else sees an empty team.
    """
    if user is None:
        return TeamView(manager=None)

    if user.role == Role.EMPLOYEE:
        manager = next((u for u in users if u.username == user.manager), None)
        managed = (manager.employees or []) if manager else []
        colleagues = [
            e for e in employees
            if e.username != user.username and e.username in managed
        ]
        return TeamView(manager=manager, members=colleagues)

    if user.role == Role.MANAGER:
        reports = [e for e in employees if e.username in (user.employees or [])]
        return TeamView(manager=None, members=reports)

    return TeamView(manager=None)


def team_hierarchy(
    users: Sequence[UserRecord], employees: Sequence[Employee],
) -> list[TeamView]:
    """Every manager with the employee records of their direct reports."""
    return [
        TeamView(
            manager=manager,
            members=[e for e in employees if e.username in (manager.employees or [])],
        )
        for manager in users
        if manager.role == Role.MANAGER
    ]


@dataclass
class TeamStats:
    total_members:      int
    average_progress:   float
    completed_items:    int
    at_risk_employees:  int


def team_stats(members: Sequence[Employee], at_risk_below: float = 40) -> TeamStats:
    if not members:
        return TeamStats(0, 0.0, 0, 0)
    progresses = [overall_progress(e) for e in members]
    return TeamStats(
        total_members     = len(members),
        average_progress  = sum(progresses) / len(progresses),
        completed_items   = sum(status_counts(e.learning_path).completed for e in members),
        at_risk_employees = sum(1 for p in progresses if p < at_risk_below),
    )


def risk_level(employee: Employee) -> str:
    """High / Medium / Low from progress and the number of scores under 60."""
    progress = overall_progress(employee)
    low_scores = sum(1 for score in employee.assessment_scores.values() if score < 60)
    if progress < 30 or low_scores > 3:
        return "High"
    if progress < 60 or low_scores > 1:
        return "Medium"
    return "Low"


PROGRESS_BUCKETS: list[tuple[str, float, float]] = [
    ("80-100%", 80, float("inf")),
    ("60-79%",  60, 80),
    ("40-59%",  40, 60),
    ("0-39%",   float("-inf"), 40),
]


def progress_distribution(members: Sequence[Employee]) -> dict[str, int]:
    counts = {label: 0 for label, _, _ in PROGRESS_BUCKETS}
    for employee in members:
        p = overall_progress(employee)
        for label, lo, hi in PROGRESS_BUCKETS:
            if lo <= p < hi:
                counts[label] += 1
                break
    return counts


# ─── Admin ────────────────────────────────────────────────────────────────────

def departments(employees: Sequence[Employee]) -> list[str]:
    """Distinct departments in first-seen order."""
    return list(dict.fromkeys(e.department for e in employees))


def filter_employees(
    employees: Sequence[Employee],
    department: str = ALL_DEPARTMENTS,
    search: str = "",
) -> list[Employee]:
    """Department equality ("all" disables it) AND name/department substring match."""
    term = search.strip().lower()
    return [
        e for e in employees
        if (department == ALL_DEPARTMENTS or e.department == department)
        and (not term or term in e.full_name.lower() or term in e.department.lower())
    ]


def is_active(employee: Employee, now: datetime, window_days: int = 7) -> bool:
    return employee.last_active > now - timedelta(days=window_days)


@dataclass
class SystemStats:
    total_users:      int
    total_managers:   int
    active_users:     int
    completion_rate:  float   # 0–100


def system_stats(
    employees: Sequence[Employee],
    users: Sequence[UserRecord],
    now: datetime,
    window_days: int = 7,
) -> SystemStats:
    ratios = [
        status_counts(e.learning_path).completed / len(e.learning_path)
        for e in employees if e.learning_path
    ]
    return SystemStats(
        total_users     = len(employees),
        total_managers  = sum(1 for u in users if u.role == Role.MANAGER),
        active_users    = sum(1 for e in employees if is_active(e, now, window_days)),
        completion_rate = (sum(ratios) / len(employees) * 100) if employees else 0.0,
    )


@dataclass
class AgentHealth:
    name:       str
    status:     str   # "healthy" | "warning" | "error"
    latency:    str
    processed:  int
    errors:     int


def agent_health() -> list[AgentHealth]:
    """Simulated agent status table for the admin overview."""
    return [
        AgentHealth("Profile Agent",     "healthy", "45ms",  1247, 2),
        AgentHealth("Assessment Agent",  "healthy", "82ms",  856,  0),
        AgentHealth("Recommender Agent", "warning", "156ms", 634,  5),
        AgentHealth("Tracker Agent",     "healthy", "23ms",  2145, 1),
    ]


# ─── Display helpers ──────────────────────────────────────────────────────────

def initials(full_name: str) -> str:
    return "".join(part[0] for part in full_name.split() if part)


def progress_band(progress: float) -> str:
    """Colour band used by progress bars: green / blue / yellow / red."""
    if progress >= 90:
        return "green"
    if progress >= 70:
        return "blue"
    if progress >= 50:
        return "yellow"
    return "red"


def clamp_progress(progress: float) -> float:
    return float(min(100.0, max(0.0, progress)))

"""
demo_dashboard.py – Console preview of a role's dashboard

Run:
    python demo_dashboard.py <username> <password>

    e.g.  python demo_dashboard.py emp1 emp123
          python demo_dashboard.py manager1 manager123
          python demo_dashboard.py admin1 admin123

Signs in against the bundled user table (the session is kept in a
throw-away store, so a browser session is left untouched) and prints the
home view for that role.
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

# ── make src/ importable without installing the package ──────────────────────
sys.path.insert(0, str(Path(__file__).parent / "src"))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from learning_hub.analytics import (
    learning_stages,
    overall_progress,
    risk_level,
    skill_gaps,
    status_counts,
    system_stats,
    team_members,
    team_stats,
)
from learning_hub.auth import AuthManager, View, default_view
from learning_hub.config import configure_logging, get_settings
from learning_hub.guardrails import GuardrailsPipeline
from learning_hub.learning_path import PrerequisiteCycleError, topological_order
from learning_hub.mock_data import (
    ASSESSMENTS,
    EMPLOYEES,
    USERS,
    EmployeeNotFoundError,
    get_employee_or_raise,
)
from learning_hub.models import Employee, ItemStatus, PublicUser
from learning_hub.recommender_agent import RecommenderAgent
from learning_hub.session_store import SessionStore
from learning_hub.tracker_agent import TrackerAgent

console = Console()

STATUS_STYLE = {
    ItemStatus.COMPLETED:   "bold green",
    ItemStatus.IN_PROGRESS: "bold cyan",
    ItemStatus.NOT_STARTED: "dim",
}
RISK_STYLE = {"High": "bold red", "Medium": "bold yellow", "Low": "bold green"}
STAGE_ICON = {"completed": "✓", "current": "◑", "pending": "·"}


# ─── Display helpers ─────────────────────────────────────────────────────────

def _bar(progress: float, width: int = 16) -> str:
    filled = round(max(0.0, min(100.0, progress)) / 100 * width)
    return "[" + "█" * filled + "░" * (width - filled) + f"] {progress:.0f}%"


def show_learner(employee: Employee, gap_threshold: int) -> None:
    summary = Table(box=box.ROUNDED, show_header=False, padding=(0, 1))
    summary.add_column("Key",   style="bold cyan", no_wrap=True)
    summary.add_column("Value", style="white")
    counts = status_counts(employee.learning_path)
    summary.add_row("Learner",   f"{employee.full_name} ({employee.department})")
    summary.add_row("Level",     f"{employee.current_level} → {employee.target_level}")
    summary.add_row("Progress",  _bar(overall_progress(employee)))
    summary.add_row("Items",     f"{counts.completed} done · {counts.in_progress} active · "
                                 f"{counts.not_started} not started")
    gaps = skill_gaps(employee, gap_threshold)
    summary.add_row("Skill gaps", ", ".join(gaps) if gaps else "[dim]None[/dim]")
    summary.add_row("Journey", "  ".join(
        f"{STAGE_ICON[s.status]} {s.title}" for s in learning_stages(employee)
    ))
    console.print(Panel(summary, title="[bold]Learner Overview[/bold]", border_style="magenta"))

    path = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan", padding=(0, 1))
    path.add_column("#", justify="right")
    path.add_column("Item")
    path.add_column("Type")
    path.add_column("Status")
    path.add_column("Progress")
    try:
        order = topological_order(employee.learning_path)
    except PrerequisiteCycleError as exc:
        console.print(f"[bold red]Learning path cannot be ordered:[/bold red] {exc}")
        order = [i.id for i in employee.learning_path]
    for step, item_id in enumerate(order, start=1):
        item = employee.item_by_id(item_id)
        path.add_row(str(step), item.title, item.type.value,
                     f"[{STATUS_STYLE[item.status]}]{item.status.label}[/]", _bar(item.progress, 10))
    console.print(Panel(path, title="[bold]Learning Path[/bold]", border_style="blue"))

    recs = RecommenderAgent().recommend(gaps, employee.skills)
    rec_table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan", padding=(0, 1))
    rec_table.add_column("Course")
    rec_table.add_column("Match", justify="right")
    rec_table.add_column("Hours", justify="right")
    for course in recs.suggested_path:
        rec_table.add_row(course.title, f"{course.relevance_score}%", f"{course.estimated_hours:g}")
    rec_table.add_row("[bold]Total[/bold]", "", f"[bold]{recs.suggested_path_hours:g}[/bold]")
    console.print(Panel(rec_table, title="[bold]Suggested Path[/bold]", border_style="cyan"))

    report = TrackerAgent().track(employee)
    console.print(Panel(
        f"Risk: [bold]{report.analytics.risk_level.value}[/bold]  ·  "
        f"{report.analytics.weekly_hours:g} h/week  ·  streak {report.analytics.streak_days} days",
        title="[bold]Progress Tracker[/bold]", border_style="yellow",
    ))


def show_manager(user: PublicUser) -> None:
    members = team_members(user, USERS, EMPLOYEES).members
    stats = team_stats(members)
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan", padding=(0, 1))
    table.add_column("Member")
    table.add_column("Level")
    table.add_column("Progress")
    table.add_column("Risk")
    for member in members:
        risk = risk_level(member)
        table.add_row(member.full_name, member.current_level,
                      _bar(overall_progress(member), 10), f"[{RISK_STYLE[risk]}]{risk}[/]")
    console.print(Panel(
        table,
        title=f"[bold]{user.department} team · avg {stats.average_progress:.0f}% · "
              f"{stats.at_risk_employees} at risk[/bold]",
        border_style="magenta",
    ))


def show_admin(now, window_days: int) -> None:
    stats = system_stats(EMPLOYEES, USERS, now, window_days)
    summary = Table(box=box.ROUNDED, show_header=False, padding=(0, 1))
    summary.add_column("Key",   style="bold cyan", no_wrap=True)
    summary.add_column("Value", style="white")
    summary.add_row("Employees",       str(stats.total_users))
    summary.add_row("Managers",        str(stats.total_managers))
    summary.add_row("Active users",    f"{stats.active_users} (last {window_days} days)")
    summary.add_row("Completion rate", f"{stats.completion_rate:.0f}%")
    console.print(Panel(summary, title="[bold]System Overview[/bold]", border_style="magenta"))

    result = GuardrailsPipeline().check_dataset(USERS, EMPLOYEES, ASSESSMENTS)
    console.print(Panel(result.summary(), title="[bold]Dataset Checks[/bold]",
                        border_style="red" if result.blocked else "green"))


# ─── Main ────────────────────────────────────────────────────────────────────

def main(argv: list[str]) -> int:
    if len(argv) != 2:
        console.print("[bold]Usage:[/bold] python demo_dashboard.py <username> <password>")
        return 2

    settings = get_settings()
    configure_logging(settings)

    console.print()
    console.print(Panel(
        "[bold]Learning Hub[/bold]\n[dim]Console dashboard preview[/dim]",
        style="on dark_blue",
        expand=False,
    ))

    with tempfile.TemporaryDirectory() as tmp:
        auth = AuthManager(USERS, SessionStore(str(Path(tmp) / "session.db")))
        if not auth.login(argv[0], argv[1]):
            console.print("\n[bold red]Invalid username or password.[/bold red]")
            return 1
        user = auth.user
        view = default_view(user)
        console.rule(f"[bold magenta]{view.label} — {user.full_name}[/bold magenta]")

        if view == View.ADMIN:
            show_admin(settings.dashboard.now(), settings.dashboard.active_window_days)
        elif view == View.MANAGER:
            show_manager(user)
        else:
            try:
                employee = get_employee_or_raise(user.username)
            except EmployeeNotFoundError as exc:
                console.print(f"\n[bold red]{exc}[/bold red]")
                return 1
            show_learner(employee, settings.dashboard.skill_gap_threshold)

        auth.logout()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main(sys.argv[1:]))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)

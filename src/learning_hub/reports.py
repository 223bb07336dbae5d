"""
reports.py – Manager quick actions, team PDF report, reminder e-mail
====================================================================
  quick_action(action, employee) → str
    User-facing confirmation for the manager dashboard buttons.

  generate_team_report_pdf(manager, members) → bytes
    Team progress report: KPI row, per-member progress / risk table and the
    items each member currently has in progress.

  send_reminder(employee, smtp) → (bool, str)
    Sends a learning reminder via SMTP when SMTP_USER / SMTP_PASS are set;
    otherwise returns (False, "Email not configured…").
"""

from __future__ import annotations

import io
import logging
import smtplib
from datetime import date
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Sequence

from learning_hub.analytics import overall_progress, risk_level, status_counts, team_stats
from learning_hub.config import SmtpConfig
from learning_hub.models import Employee, ItemStatus, PublicUser

logger = logging.getLogger(__name__)


# ─── Quick actions ────────────────────────────────────────────────────────────

QUICK_ACTIONS = (
    "start-assessment",
    "generate-report",
    "set-goals",
    "send-reminder",
    "schedule-meeting",
)


def quick_action(action: str, employee: Optional[Employee] = None) -> str:
    """Return the confirmation shown after a manager quick action."""
    who = employee.full_name if employee else "team member"
    if action == "start-assessment":
        return "Assessment triggered for all team members. Notifications sent!"
    if action == "generate-report":
        return "Generating team progress report... Download will start shortly."
    if action == "set-goals":
        return "Opening goal setting interface for team objectives."
    if action == "send-reminder":
        return f"Reminder sent to {who}"
    if action == "schedule-meeting":
        return f"1:1 meeting scheduled with {who}"
    raise ValueError(f"Unknown quick action: {action!r}")


# ─── Reminder e-mail ──────────────────────────────────────────────────────────

def reminder_body(employee: Employee) -> str:
    active = employee.items_with_status(ItemStatus.IN_PROGRESS)
    lines = "".join(
        f"<li>{item.title} — {item.progress}%</li>" for item in active
    ) or "<li>No items in progress — pick your next course!</li>"
    return (
        f"<p>Hi {employee.full_name.split()[0]},</p>"
        f"<p>A quick reminder to keep your learning path moving. "
        f"You're at <b>{overall_progress(employee):.0f}%</b> overall.</p>"
        f"<ul>{lines}</ul>"
        "<p>— Learning Hub</p>"
    )


def send_reminder(employee: Employee, smtp: SmtpConfig) -> tuple[bool, str]:
    """Send a reminder e-mail to *employee*; never raises on SMTP errors."""
    if not smtp.is_configured:
        return False, (
            "Email not configured. Set SMTP_USER and SMTP_PASS "
            "in your .env file (or Streamlit secrets)."
        )

    msg = MIMEMultipart("alternative")
    msg["Subject"] = "Your learning path: keep going!"
    msg["From"]    = smtp.sender
    msg["To"]      = employee.email
    msg.attach(MIMEText(reminder_body(employee), "html", "utf-8"))

    try:
        if smtp.port == 465:
            import ssl
            ctx = ssl.create_default_context()
            with smtplib.SMTP_SSL(smtp.host, smtp.port, context=ctx, timeout=15) as server:
                server.login(smtp.user, smtp.password)
                server.sendmail(smtp.sender, [employee.email], msg.as_string())
        else:
            with smtplib.SMTP(smtp.host, smtp.port, timeout=15) as server:
                server.ehlo()
                server.starttls()
                server.login(smtp.user, smtp.password)
                server.sendmail(smtp.sender, [employee.email], msg.as_string())
        logger.info("Reminder e-mailed to %s", employee.username)
        return True, f"Reminder sent to {employee.full_name}"
    except smtplib.SMTPAuthenticationError:
        logger.warning("SMTP authentication failed sending reminder to %s", employee.username)
        return False, "Authentication failed. Check your SMTP username and password/API key."
    except (smtplib.SMTPException, OSError) as exc:
        logger.warning("Reminder to %s failed: %s", employee.username, exc)
        return False, f"Failed to send email: {exc}"


# ─── PDF report ───────────────────────────────────────────────────────────────

def _rl_colour(hex_str: str):
    """Convert a CSS hex colour string to a reportlab Color."""
    from reportlab.lib import colors as rl_colors
    h = hex_str.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    r, g, b = int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255
    return rl_colors.Color(r, g, b)


def generate_team_report_pdf(manager: PublicUser, members: Sequence[Employee]) -> bytes:
    """Build the team progress PDF for *manager*. Returns raw PDF bytes."""
    from reportlab.lib.pagesizes import A4
    from reportlab.lib import colors as rl_colors
    from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
    from reportlab.lib.units import cm
    from reportlab.lib.enums import TA_CENTER
    from reportlab.platypus import (
        SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, HRFlowable,
    )

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        leftMargin=1.8 * cm, rightMargin=1.8 * cm,
        topMargin=1.8 * cm, bottomMargin=1.8 * cm,
    )

    styles = getSampleStyleSheet()
    TEAL   = _rl_colour("#0d9488")
    DARK   = _rl_colour("#1f2937")
    MUTED  = _rl_colour("#6b7280")
    GREEN  = _rl_colour("#16a34a")
    RED    = _rl_colour("#dc2626")
    AMBER  = _rl_colour("#d97706")
    WHITE  = rl_colors.white
    LIGHT  = _rl_colour("#f0fdfa")

    h1 = ParagraphStyle("H1", parent=styles["Heading1"],
                        textColor=WHITE, fontSize=16, leading=20, spaceAfter=4)
    h2 = ParagraphStyle("H2", parent=styles["Heading2"],
                        textColor=TEAL, fontSize=12, leading=15, spaceBefore=12, spaceAfter=4)
    body = ParagraphStyle("Body", parent=styles["Normal"],
                          textColor=DARK, fontSize=9, leading=13)
    small = ParagraphStyle("Small", parent=styles["Normal"],
                           textColor=MUTED, fontSize=8, leading=11)
    centre = ParagraphStyle("Centre", parent=styles["Normal"],
                            alignment=TA_CENTER, fontSize=9, leading=13)

    RISK_COLOUR = {"High": RED, "Medium": AMBER, "Low": GREEN}

    story = []
    today = date.today().strftime("%B %d, %Y")
    stats = team_stats(members)

    # ── Header banner ─────────────────────────────────────────────────────────
    banner = Table([[Paragraph(
        f"<b>Team Progress Report</b><br/>"
        f"<font size='10'>{manager.full_name} · {manager.department} · {today}</font>",
        h1,
    )]], colWidths=[doc.width])
    banner.setStyle(TableStyle([
        ("BACKGROUND",    (0, 0), (-1, -1), TEAL),
        ("TOPPADDING",    (0, 0), (-1, -1), 12),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 12),
    ]))
    story.append(banner)
    story.append(Spacer(1, 0.4 * cm))

    # ── KPI row ───────────────────────────────────────────────────────────────
    story.append(Paragraph("Team Summary", h2))
    kpi = Table([
        ["Members", "Avg Progress", "Completed Items", "At Risk"],
        [
            Paragraph(f"<b>{stats.total_members}</b>", centre),
            Paragraph(f"<b>{stats.average_progress:.0f}%</b>", centre),
            Paragraph(f"<b>{stats.completed_items}</b>", centre),
            Paragraph(f"<b>{stats.at_risk_employees}</b>", centre),
        ],
    ], colWidths=[doc.width / 4] * 4)
    kpi.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), TEAL),
        ("TEXTCOLOR",  (0, 0), (-1, 0), WHITE),
        ("BACKGROUND", (0, 1), (-1, 1), LIGHT),
        ("FONTNAME",   (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE",   (0, 0), (-1, 0), 8),
        ("ALIGN",      (0, 0), (-1, -1), "CENTER"),
        ("VALIGN",     (0, 0), (-1, -1), "MIDDLE"),
        ("GRID",       (0, 0), (-1, -1), 0.5, rl_colors.lightgrey),
    ]))
    story.append(kpi)

    # ── Member table ──────────────────────────────────────────────────────────
    story.append(Paragraph("Members", h2))
    story.append(HRFlowable(width="100%", thickness=1, color=TEAL))
    story.append(Spacer(1, 0.15 * cm))

    if not members:
        story.append(Paragraph("No direct reports.", small))
    else:
        rows = [["Name", "Level", "Progress", "Done / Active", "Risk"]]
        risk_styles = []
        for idx, emp in enumerate(members, start=1):
            counts = status_counts(emp.learning_path)
            risk = risk_level(emp)
            rows.append([
                Paragraph(emp.full_name, body),
                Paragraph(f"{emp.current_level} → {emp.target_level}", small),
                f"{overall_progress(emp):.0f}%",
                f"{counts.completed} / {counts.in_progress}",
                risk,
            ])
            risk_styles.append(("TEXTCOLOR", (4, idx), (4, idx), RISK_COLOUR[risk]))
        table = Table(rows, colWidths=[
            doc.width * 0.26, doc.width * 0.32, doc.width * 0.14,
            doc.width * 0.16, doc.width * 0.12,
        ])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), TEAL),
            ("TEXTCOLOR",  (0, 0), (-1, 0), WHITE),
            ("FONTNAME",   (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE",   (0, 0), (-1, -1), 8),
            ("VALIGN",     (0, 0), (-1, -1), "MIDDLE"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [WHITE, LIGHT]),
            ("GRID",       (0, 0), (-1, -1), 0.5, rl_colors.lightgrey),
        ] + risk_styles))
        story.append(table)

        # ── In-progress work per member ───────────────────────────────────────
        story.append(Paragraph("Current Work", h2))
        for emp in members:
            active = emp.items_with_status(ItemStatus.IN_PROGRESS)
            text = ", ".join(f"{i.title} ({i.progress}%)" for i in active) or "nothing in progress"
            story.append(Paragraph(f"<b>{emp.full_name}:</b> {text}", body))

    story.append(Spacer(1, 0.4 * cm))
    story.append(Paragraph(f"Generated by Learning Hub · {today}", small))

    doc.build(story)
    return buf.getvalue()

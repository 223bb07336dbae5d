"""
guardrails.py – Dataset consistency checks
==========================================
The models accept anything structurally valid; these rules report the
semantic problems the dashboards would otherwise render silently (a
progress bar past 100 %, a prerequisite that points nowhere, a manager
who doesn't list their own report).

Guardrail levels
----------------
BLOCK   – The dataset is inconsistent in a way that breaks a view.
WARN    – Renders, but a number or a label will be misleading.
INFO    – Advisory note shown on the admin Dataset Checks tab.

Rules
-----
Learning path (per employee):
  D-01  Item progress within 0–100
  D-02  Status / progress agree (completed ⇒ 100, not-started ⇒ 0)
  D-03  Assessment scores within 0–100
  D-04  Prerequisite reference resolves (path item or completed course)
  D-05  No prerequisite cycle

Identity (user table ↔ employees):
  D-06  Manager back-references agree in both directions
  D-07  Every employee-role user has a learning profile

Assessments:
  D-08  Every question's answer index points at one of its options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from learning_hub.learning_path import find_cycle, missing_prerequisites
from learning_hub.models import (
    Assessment,
    Employee,
    ItemStatus,
    Role,
    UserRecord,
)


# ─── Enums & data models ─────────────────────────────────────────────────────

class GuardrailLevel(str, Enum):
    BLOCK = "BLOCK"
    WARN  = "WARN"
    INFO  = "INFO"


@dataclass
class GuardrailViolation:
    code:    str
    level:   GuardrailLevel
    message: str
    field:   str = ""   # which record / field triggered the violation


@dataclass
class GuardrailResult:
    passed:     bool
    violations: list[GuardrailViolation] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        return any(v.level == GuardrailLevel.BLOCK for v in self.violations)

    @property
    def warnings(self) -> list[GuardrailViolation]:
        return [v for v in self.violations if v.level == GuardrailLevel.WARN]

    @property
    def infos(self) -> list[GuardrailViolation]:
        return [v for v in self.violations if v.level == GuardrailLevel.INFO]

    def summary(self) -> str:
        if not self.violations:
            return "✅ All dataset checks passed."
        lines = [f"{'🚫' if v.level == GuardrailLevel.BLOCK else '⚠️' if v.level == GuardrailLevel.WARN else 'ℹ️'} [{v.code}] {v.message}" for v in self.violations]
        return "\n".join(lines)


def _result(violations: list[GuardrailViolation]) -> GuardrailResult:
    return GuardrailResult(
        passed=not any(v.level == GuardrailLevel.BLOCK for v in violations),
        violations=violations,
    )


# ─── Guardrail checks ─────────────────────────────────────────────────────────

class LearningPathGuardrails:
    """D-01 – D-05: one employee's learning path and scores."""

    def check(self, employee: Employee) -> GuardrailResult:
        violations: list[GuardrailViolation] = []
        who = employee.username

        for item in employee.learning_path:
            # D-01 Progress range
            if not 0 <= item.progress <= 100:
                violations.append(GuardrailViolation(
                    code="D-01", level=GuardrailLevel.WARN,
                    field=f"{who}.{item.id}.progress",
                    message=f"{who}: '{item.title}' progress {item.progress} is outside 0–100; display is clamped.",
                ))

            # D-02 Status / progress consistency
            if item.status == ItemStatus.COMPLETED and item.progress != 100:
                violations.append(GuardrailViolation(
                    code="D-02", level=GuardrailLevel.WARN,
                    field=f"{who}.{item.id}.status",
                    message=f"{who}: '{item.title}' is completed but shows {item.progress}% progress.",
                ))
            elif item.status == ItemStatus.NOT_STARTED and item.progress != 0:
                violations.append(GuardrailViolation(
                    code="D-02", level=GuardrailLevel.WARN,
                    field=f"{who}.{item.id}.status",
                    message=f"{who}: '{item.title}' is not started but shows {item.progress}% progress.",
                ))

        # D-03 Score range
        for skill, score in employee.assessment_scores.items():
            if not 0 <= score <= 100:
                violations.append(GuardrailViolation(
                    code="D-03", level=GuardrailLevel.WARN,
                    field=f"{who}.assessment_scores.{skill}",
                    message=f"{who}: {skill} score {score} is outside 0–100.",
                ))

        # D-04 Prerequisite existence
        for item_id, ref in missing_prerequisites(employee):
            violations.append(GuardrailViolation(
                code="D-04", level=GuardrailLevel.WARN,
                field=f"{who}.{item_id}.prerequisite",
                message=f"{who}: '{item_id}' requires '{ref}', which is neither in the path nor a completed course.",
            ))

        # D-05 Cycles
        cycle = find_cycle(employee.learning_path)
        if cycle:
            violations.append(GuardrailViolation(
                code="D-05", level=GuardrailLevel.BLOCK,
                field=f"{who}.learning_path",
                message=f"{who}: prerequisite cycle {' → '.join(cycle)}.",
            ))

        return _result(violations)


class IdentityGuardrails:
    """D-06 – D-07: user table against employee profiles."""

    def check(self, users: Sequence[UserRecord], employees: Sequence[Employee]) -> GuardrailResult:
        violations: list[GuardrailViolation] = []
        by_name = {u.username: u for u in users}
        employee_names = {e.username for e in employees}

        for user in users:
            # D-06 Employee → manager direction
            if user.role == Role.EMPLOYEE and user.manager:
                manager = by_name.get(user.manager)
                if manager is None or manager.role != Role.MANAGER:
                    violations.append(GuardrailViolation(
                        code="D-06", level=GuardrailLevel.WARN,
                        field=f"{user.username}.manager",
                        message=f"{user.username}: manager '{user.manager}' is not a manager account.",
                    ))
                elif user.username not in (manager.employees or []):
                    violations.append(GuardrailViolation(
                        code="D-06", level=GuardrailLevel.WARN,
                        field=f"{manager.username}.employees",
                        message=f"{manager.username} does not list {user.username} as a report.",
                    ))

            # D-06 Manager → employee direction
            if user.role == Role.MANAGER:
                for report in user.employees or []:
                    target = by_name.get(report)
                    if target is None or target.manager != user.username:
                        violations.append(GuardrailViolation(
                            code="D-06", level=GuardrailLevel.WARN,
                            field=f"{user.username}.employees",
                            message=f"{user.username} lists '{report}', whose manager is not {user.username}.",
                        ))

            # D-07 Profile presence
            if user.role == Role.EMPLOYEE and user.username not in employee_names:
                violations.append(GuardrailViolation(
                    code="D-07", level=GuardrailLevel.WARN,
                    field=user.username,
                    message=f"{user.username} has no learning profile; the learner view will show an error.",
                ))

        return _result(violations)


class AssessmentGuardrails:
    """D-08: answer keys point at real options."""

    def check(self, assessment: Assessment) -> GuardrailResult:
        violations: list[GuardrailViolation] = []
        for q in assessment.questions:
            if not 0 <= q.correct_answer < len(q.options):
                violations.append(GuardrailViolation(
                    code="D-08", level=GuardrailLevel.BLOCK,
                    field=f"{assessment.id}.{q.id}",
                    message=f"{assessment.id}/{q.id}: answer index {q.correct_answer} has no option.",
                ))
        return _result(violations)


class GuardrailsPipeline:
    """
    Single entry-point that runs every dataset check.

    Usage::

        gp = GuardrailsPipeline()
        result = gp.check_dataset(USERS, EMPLOYEES, ASSESSMENTS)
        if result.blocked: ...
    """

    def __init__(self):
        self.path_guard     = LearningPathGuardrails()
        self.identity_guard = IdentityGuardrails()
        self.assess_guard   = AssessmentGuardrails()

    def check_employee(self, employee: Employee) -> GuardrailResult:
        return self.path_guard.check(employee)

    def check_identity(self, users, employees) -> GuardrailResult:
        return self.identity_guard.check(users, employees)

    def check_assessment(self, assessment: Assessment) -> GuardrailResult:
        return self.assess_guard.check(assessment)

    def check_dataset(
        self,
        users: Sequence[UserRecord],
        employees: Sequence[Employee],
        assessments: Sequence[Assessment] = (),
    ) -> GuardrailResult:
        results = [self.check_employee(e) for e in employees]
        results.append(self.check_identity(users, employees))
        results.extend(self.check_assessment(a) for a in assessments)
        return self.merge(*results)

    def merge(self, *results: GuardrailResult) -> GuardrailResult:
        """Merge multiple GuardrailResult objects into one."""
        all_v = []
        for r in results:
            all_v.extend(r.violations)
        return _result(all_v)

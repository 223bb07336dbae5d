"""
Data models for the Learning Hub dashboard.

Identity records (users / credentials) and the learning dataset
(employees, learning-path items, courses, assessments) are defined here.
Everything is static at runtime; the only entity created and destroyed
while the app runs is the session, which holds a PublicUser.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ─── Enumerations ────────────────────────────────────────────────────────────

class Role(str, Enum):
    """Role tag on every user record; drives which dashboards are reachable."""
    ADMIN    = "admin"
    MANAGER  = "manager"
    EMPLOYEE = "employee"


class ItemType(str, Enum):
    COURSE     = "course"
    ASSESSMENT = "assessment"
    PROJECT    = "project"


class ItemStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED   = "completed"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


class CourseLevel(str, Enum):
    BEGINNER     = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED     = "advanced"


class Difficulty(str, Enum):
    EASY   = "easy"
    MEDIUM = "medium"
    HARD   = "hard"


# ─── Identity ────────────────────────────────────────────────────────────────

class PublicUser(BaseModel):
    """
    A user record as seen by the rest of the app; never carries a password.
    This is the payload held by the session and written to the session store.
    """
    username:   str
    role:       Role
    full_name:  str
    department: str
    email:      str
    manager:    Optional[str]       = None   # username of the employee's manager
    employees:  Optional[list[str]] = None   # usernames managed (managers only)


class UserRecord(PublicUser):
    """Credential table entry: a PublicUser plus its plaintext password."""
    password: str

    def to_public(self) -> PublicUser:
        return PublicUser(**self.model_dump(exclude={"password"}))


# ─── Learning dataset ────────────────────────────────────────────────────────

class LearningPathItem(BaseModel):
    """One unit in an employee's assigned sequence of work."""
    id:               str
    title:            str
    type:             ItemType
    estimated_hours:  float
    status:           ItemStatus
    progress:         int = Field(description="0–100; not clamped at model level")
    prerequisite:     Optional[str] = Field(
        default=None,
        description="Id of another item (or a completed course) this one depends on",
    )
    skills:           list[str] = Field(default_factory=list)


class Employee(BaseModel):
    """Learning profile for one employee-role user."""
    username:             str
    full_name:            str
    department:           str
    email:                str
    skills:               list[str]
    current_level:        str
    target_level:         str
    completed_courses:    list[str] = Field(default_factory=list)
    in_progress_courses:  list[str] = Field(default_factory=list)
    assessment_scores:    dict[str, int] = Field(
        default_factory=dict, description="skill → 0–100 assessed score",
    )
    learning_path:        list[LearningPathItem] = Field(default_factory=list)
    last_active:          datetime

    # ── Derived helpers ──────────────────────────────────────────────────────

    def items_with_status(self, status: ItemStatus) -> list[LearningPathItem]:
        return [item for item in self.learning_path if item.status == status]

    def item_by_id(self, item_id: str) -> Optional[LearningPathItem]:
        return next((i for i in self.learning_path if i.id == item_id), None)


class Course(BaseModel):
    """Catalogue entry."""
    id:               str
    title:            str
    description:      str
    category:         str
    level:            CourseLevel
    estimated_hours:  float
    skills:           list[str]
    rating:           float
    enrolled_count:   int
    completion_rate:  int


class Question(BaseModel):
    id:              str
    text:            str
    options:         list[str]
    correct_answer:  int = Field(description="Index into options")
    difficulty:      Difficulty
    skill:           str


class Assessment(BaseModel):
    id:             str
    title:          str
    category:       str
    passing_score:  int
    time_limit:     int = Field(description="Minutes")
    questions:      list[Question]


# ─── Admin overview aggregates ───────────────────────────────────────────────

class DepartmentProgress(BaseModel):
    department:   str
    completed:    int
    in_progress:  int
    not_started:  int


class SkillGapRow(BaseModel):
    skill:          str
    current_level:  int
    target_level:   int
    gap:            int


class MonthlyProgress(BaseModel):
    month:      str
    completed:  int
    started:    int

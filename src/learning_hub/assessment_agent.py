"""
assessment_agent.py – Adaptive skills quiz and assessment catalogue
===================================================================
Two pieces back the learner Assessment tab:

  ASSESSMENT_CATALOGUE   the learner's assessment cards (status, score,
                         action label)
  QuizSession            a five-question adaptive quiz; answers are taken
                         in order and per-skill scores are produced once
                         the last question is answered

score_assessment() scores one of the dataset assessments (mock_data.ASSESSMENTS)
against its own answer key and passing score.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from learning_hub.models import Assessment, Difficulty, ItemStatus


# ─── Catalogue ────────────────────────────────────────────────────────────────

@dataclass
class CatalogueEntry:
    id:              str
    title:           str
    description:     str
    category:        str
    estimated_time:  int          # minutes
    difficulty:      Difficulty
    skills:          list[str]
    status:          ItemStatus
    score:           Optional[int] = None

    @property
    def action_label(self) -> str:
        if self.status == ItemStatus.COMPLETED:
            return "Retake"
        if self.status == ItemStatus.IN_PROGRESS:
            return "Continue"
        return "Start Assessment"


ASSESSMENT_CATALOGUE: list[CatalogueEntry] = [
    CatalogueEntry(
        id="js-fundamentals",
        title="JavaScript Fundamentals Assessment",
        description="Test your knowledge of core JavaScript concepts, ES6+ features, "
                    "and modern programming practices.",
        category="Programming", estimated_time=45, difficulty=Difficulty.MEDIUM,
        skills=["JavaScript", "ES6+", "DOM Manipulation"],
        status=ItemStatus.COMPLETED, score=85,
    ),
    CatalogueEntry(
        id="react-advanced",
        title="Advanced React Patterns",
        description="Evaluate your understanding of advanced React concepts, hooks, "
                    "context, and performance optimization.",
        category="Frontend", estimated_time=60, difficulty=Difficulty.HARD,
        skills=["React", "Hooks", "Performance", "State Management"],
        status=ItemStatus.NOT_STARTED,
    ),
    CatalogueEntry(
        id="system-design",
        title="System Design Fundamentals",
        description="Assess your ability to design scalable systems, handle load "
                    "balancing, and database optimization.",
        category="Architecture", estimated_time=90, difficulty=Difficulty.HARD,
        skills=["System Design", "Scalability", "Databases", "Architecture"],
        status=ItemStatus.NOT_STARTED,
    ),
    CatalogueEntry(
        id="node-backend",
        title="Node.js Backend Development",
        description="Test your knowledge of Node.js, Express, API design, and backend "
                    "best practices.",
        category="Backend", estimated_time=50, difficulty=Difficulty.MEDIUM,
        skills=["Node.js", "Express", "REST APIs", "Database Integration"],
        status=ItemStatus.IN_PROGRESS,
    ),
    CatalogueEntry(
        id="python-data",
        title="Python for Data Analysis",
        description="Evaluate your skills in Python data manipulation, analysis "
                    "libraries, and statistical concepts.",
        category="Data Science", estimated_time=55, difficulty=Difficulty.MEDIUM,
        skills=["Python", "Pandas", "NumPy", "Data Analysis"],
        status=ItemStatus.NOT_STARTED,
    ),
]


def get_catalogue_entry(entry_id: str) -> Optional[CatalogueEntry]:
    return next((e for e in ASSESSMENT_CATALOGUE if e.id == entry_id), None)


# ─── Adaptive quiz ────────────────────────────────────────────────────────────

@dataclass
class QuizQuestion:
    id:              str
    text:            str
    options:         list[str]
    difficulty:      Difficulty
    skill:           str
    correct_index:   int


QUIZ_QUESTIONS: list[QuizQuestion] = [
    QuizQuestion("1", "What is the correct way to handle asynchronous operations in JavaScript?",
                 ["Callbacks only", "Promises and async/await", "setTimeout only", "Synchronous code"],
                 Difficulty.MEDIUM, "JavaScript", 1),
    QuizQuestion("2", "Which React hook is used for managing component lifecycle?",
                 ["useState", "useEffect", "useContext", "useReducer"],
                 Difficulty.EASY, "React", 1),
    QuizQuestion("3", "What is the purpose of normalization in database design?",
                 ["Improve performance", "Reduce redundancy", "Increase storage", "Add complexity"],
                 Difficulty.MEDIUM, "Database", 1),
    QuizQuestion("4", "Which algorithm has the best average-case time complexity for sorting?",
                 ["Bubble Sort O(n²)", "Quick Sort O(n log n)", "Selection Sort O(n²)",
                  "Linear Search O(n)"],
                 Difficulty.HARD, "Algorithms", 1),
    QuizQuestion("5", "What is the primary benefit of microservices architecture?",
                 ["Reduced complexity", "Independent scalability", "Faster development",
                  "Lower costs"],
                 Difficulty.HARD, "System Design", 1),
]

QUIZ_TIME_LIMIT_S = 30 * 60


class QuizState(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED   = "completed"


@dataclass
class SkillResult:
    skill:  str
    score:  int   # 0–100

    @property
    def band(self) -> str:
        if self.score >= 80:
            return "strong"
        if self.score >= 60:
            return "moderate"
        return "weak"


def score_by_skill(
    questions: Sequence[QuizQuestion], answers: Sequence[int],
) -> list[SkillResult]:
    """Per-skill percentage correct, skills in first-seen order."""
    tally: dict[str, list[int]] = {}
    for question, answer in zip(questions, answers):
        correct_total = tally.setdefault(question.skill, [0, 0])
        correct_total[1] += 1
        if answer == question.correct_index:
            correct_total[0] += 1
    return [
        SkillResult(skill=skill, score=round(correct / total * 100))
        for skill, (correct, total) in tally.items()
    ]


@dataclass
class QuizSession:
    """State of one quiz attempt; a new instance per attempt."""
    questions:       list[QuizQuestion] = field(default_factory=lambda: list(QUIZ_QUESTIONS))
    answers:         list[int] = field(default_factory=list)
    time_remaining:  int = QUIZ_TIME_LIMIT_S
    results:         list[SkillResult] = field(default_factory=list)

    @property
    def state(self) -> QuizState:
        return QuizState.COMPLETED if len(self.answers) >= len(self.questions) else QuizState.IN_PROGRESS

    @property
    def current_index(self) -> int:
        return min(len(self.answers), len(self.questions) - 1)

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.state == QuizState.COMPLETED:
            return None
        return self.questions[len(self.answers)]

    @property
    def progress_pct(self) -> float:
        """Position bar: question number shown over total."""
        if not self.questions:
            return 100.0
        return (self.current_index + 1) / len(self.questions) * 100

    def answer(self, option_index: int) -> Optional[list[SkillResult]]:
        """Record an answer; returns the results when this was the last question."""
        question = self.current_question
        if question is None:
            raise RuntimeError("Quiz already completed")
        if not 0 <= option_index < len(question.options):
            raise ValueError(
                f"Option {option_index} out of range for question {question.id}"
            )
        self.answers.append(option_index)
        if self.state == QuizState.COMPLETED:
            self.results = score_by_skill(self.questions, self.answers)
            return self.results
        return None

    def tick(self, seconds: int = 1) -> None:
        self.time_remaining = max(0, self.time_remaining - seconds)


def format_time(seconds: int) -> str:
    """m:ss, e.g. 1800 → '30:00'."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins}:{secs:02d}"


# ─── Dataset assessments ──────────────────────────────────────────────────────

@dataclass
class AssessmentScore:
    assessment_id:  str
    correct:        int
    total:          int
    score_pct:      int
    passed:         bool


def score_assessment(assessment: Assessment, answers: Sequence[int]) -> AssessmentScore:
    """Score *answers* (one option index per question) against the answer key."""
    if len(answers) != len(assessment.questions):
        raise ValueError(
            f"{assessment.id}: expected {len(assessment.questions)} answers, got {len(answers)}"
        )
    correct = sum(
        1 for question, answer in zip(assessment.questions, answers)
        if answer == question.correct_answer
    )
    total = len(assessment.questions)
    score_pct = round(correct / total * 100) if total else 0
    return AssessmentScore(
        assessment_id = assessment.id,
        correct       = correct,
        total         = total,
        score_pct     = score_pct,
        passed        = score_pct >= assessment.passing_score,
    )

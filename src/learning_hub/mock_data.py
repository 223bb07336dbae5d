"""
mock_data.py
────────────
The static dataset every dashboard reads from: the credential table, the
employee learning profiles, the course catalogue, the sample assessments
and the admin overview aggregates.

Nothing here is mutated at runtime.  Lookups return the shared model
instances, so callers must treat them as read-only.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from learning_hub.models import (
    Assessment,
    Course,
    DepartmentProgress,
    Employee,
    LearningPathItem,
    MonthlyProgress,
    Question,
    SkillGapRow,
    UserRecord,
)


class EmployeeNotFoundError(LookupError):
    """Raised when a signed-in identity has no learning profile."""


# ─────────────────────────────────────────────────────────────────────────────
# Helper: tiny builder helpers so the tables stay readable
# ─────────────────────────────────────────────────────────────────────────────

def _item(
    item_id: str,
    title: str,
    item_type: str,
    hours: float,
    status: str,
    progress: int,
    skills: list[str],
    prerequisite: Optional[str] = None,
) -> LearningPathItem:
    return LearningPathItem(
        id=item_id,
        title=title,
        type=item_type,
        estimated_hours=hours,
        status=status,
        progress=progress,
        prerequisite=prerequisite,
        skills=skills,
    )


def _onboarding(assessment_title: str, hours: float, skills: list[str]) -> list[LearningPathItem]:
    """Every path opens with the profile analysis and a skills assessment."""
    return [
        _item("profile-analysis", "Profile Analysis Complete", "assessment",
              0.5, "completed", 100, ["Assessment"]),
        _item("skill-assessment", assessment_title, "assessment",
              hours, "completed", 100, skills),
    ]


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ─────────────────────────────────────────────────────────────────────────────
# Credential table
# ─────────────────────────────────────────────────────────────────────────────

USERS: list[UserRecord] = [
    UserRecord(username="admin1", password="admin123", role="admin",
               full_name="Sarah Johnson", department="IT Operations",
               email="sarah.johnson@hexaware.com"),
    UserRecord(username="manager1", password="manager123", role="manager",
               employees=["emp1", "emp2", "emp3"],
               full_name="Michael Chen", department="Software Development",
               email="michael.chen@hexaware.com"),
    UserRecord(username="manager2", password="manager123", role="manager",
               employees=["emp4", "emp5"],
               full_name="Priya Sharma", department="Data Analytics",
               email="priya.sharma@hexaware.com"),
    UserRecord(username="emp1", password="emp123", role="employee",
               full_name="Alex Rodriguez", department="Software Development",
               email="alex.rodriguez@hexaware.com", manager="manager1"),
    UserRecord(username="emp2", password="emp123", role="employee",
               full_name="Emily Davis", department="Software Development",
               email="emily.davis@hexaware.com", manager="manager1"),
    UserRecord(username="emp3", password="emp123", role="employee",
               full_name="James Wilson", department="Software Development",
               email="james.wilson@hexaware.com", manager="manager1"),
    UserRecord(username="emp4", password="emp123", role="employee",
               full_name="Lisa Wang", department="Data Analytics",
               email="lisa.wang@hexaware.com", manager="manager2"),
    UserRecord(username="emp5", password="emp123", role="employee",
               full_name="David Kumar", department="Data Analytics",
               email="david.kumar@hexaware.com", manager="manager2"),
]


# ─────────────────────────────────────────────────────────────────────────────
# Employee learning profiles
# ─────────────────────────────────────────────────────────────────────────────

EMPLOYEES: list[Employee] = [
    Employee(
        username="emp1",
        full_name="Alex Rodriguez",
        department="Software Development",
        email="alex.rodriguez@hexaware.com",
        skills=["JavaScript", "React", "Node.js"],
        current_level="Junior Developer",
        target_level="Senior Developer",
        completed_courses=["js-fundamentals", "react-basics"],
        in_progress_courses=["advanced-react", "node-backend"],
        assessment_scores={"JavaScript": 78, "React": 65, "Node.js": 45},
        learning_path=_onboarding("Technical Skills Assessment", 2,
                                  ["JavaScript", "React", "Node.js"]) + [
            _item("advanced-react", "Advanced React Patterns", "course",
                  24, "in-progress", 60, ["React", "JavaScript"],
                  prerequisite="react-basics"),
            _item("node-backend", "Node.js Backend Development", "course",
                  32, "in-progress", 30, ["Node.js", "Express", "MongoDB"]),
            _item("fullstack-project", "Full-Stack Application Project", "project",
                  40, "not-started", 0, ["React", "Node.js", "Database Design"],
                  prerequisite="node-backend"),
            _item("senior-dev-assessment", "Senior Developer Certification", "assessment",
                  3, "not-started", 0, ["System Design", "Leadership"],
                  prerequisite="fullstack-project"),
        ],
        last_active=_ts("2024-01-15T10:30:00Z"),
    ),
    Employee(
        username="emp2",
        full_name="Emily Davis",
        department="Software Development",
        email="emily.davis@hexaware.com",
        skills=["Python", "Django", "PostgreSQL"],
        current_level="Mid-level Developer",
        target_level="Senior Developer",
        completed_courses=["python-basics", "django-fundamentals", "database-design"],
        in_progress_courses=["advanced-python", "system-design"],
        assessment_scores={"Python": 85, "Django": 72, "PostgreSQL": 68, "System Design": 55},
        learning_path=_onboarding("Technical Skills Assessment", 2,
                                  ["Python", "Django", "PostgreSQL"]) + [
            _item("advanced-python", "Advanced Python Programming", "course",
                  20, "in-progress", 75, ["Python", "Design Patterns"]),
            _item("system-design", "System Design Fundamentals", "course",
                  28, "in-progress", 40, ["System Design", "Architecture"]),
            _item("microservices", "Microservices Architecture", "course",
                  24, "not-started", 0, ["Microservices", "Docker", "Kubernetes"],
                  prerequisite="system-design"),
        ],
        last_active=_ts("2024-01-14T14:45:00Z"),
    ),
    Employee(
        username="emp3",
        full_name="James Wilson",
        department="Software Development",
        email="james.wilson@hexaware.com",
        skills=["Java", "Spring Boot", "MySQL"],
        current_level="Junior Developer",
        target_level="Mid-level Developer",
        completed_courses=["java-basics", "spring-intro"],
        in_progress_courses=["spring-boot-advanced"],
        assessment_scores={"Java": 70, "Spring Boot": 58, "MySQL": 62},
        learning_path=_onboarding("Technical Skills Assessment", 2,
                                  ["Java", "Spring Boot", "MySQL"]) + [
            _item("spring-boot-advanced", "Advanced Spring Boot", "course",
                  30, "in-progress", 45, ["Spring Boot", "REST APIs", "Security"]),
            _item("testing-fundamentals", "Testing Best Practices", "course",
                  16, "not-started", 0, ["JUnit", "Integration Testing", "TDD"]),
        ],
        last_active=_ts("2024-01-13T09:15:00Z"),
    ),
    Employee(
        username="emp4",
        full_name="Lisa Wang",
        department="Data Analytics",
        email="lisa.wang@hexaware.com",
        skills=["Python", "SQL", "Tableau", "Machine Learning"],
        current_level="Data Analyst",
        target_level="Senior Data Scientist",
        completed_courses=["python-data-analysis", "sql-advanced", "tableau-basics"],
        in_progress_courses=["machine-learning", "deep-learning"],
        assessment_scores={"Python": 88, "SQL": 92, "Tableau": 75, "Machine Learning": 65},
        learning_path=_onboarding("Data Science Skills Assessment", 2.5,
                                  ["Python", "SQL", "Statistics", "ML"]) + [
            _item("machine-learning", "Machine Learning Fundamentals", "course",
                  35, "in-progress", 70, ["Machine Learning", "Python", "Scikit-learn"]),
            _item("deep-learning", "Deep Learning with TensorFlow", "course",
                  40, "in-progress", 25, ["Deep Learning", "TensorFlow", "Neural Networks"],
                  prerequisite="machine-learning"),
            _item("data-science-project", "End-to-End ML Project", "project",
                  50, "not-started", 0, ["MLOps", "Model Deployment", "Data Pipeline"],
                  prerequisite="deep-learning"),
        ],
        last_active=_ts("2024-01-15T16:20:00Z"),
    ),
    Employee(
        username="emp5",
        full_name="David Kumar",
        department="Data Analytics",
        email="david.kumar@hexaware.com",
        skills=["R", "SQL", "Power BI", "Statistics"],
        current_level="Junior Data Analyst",
        target_level="Data Analyst",
        completed_courses=["r-programming", "statistics-basics"],
        in_progress_courses=["advanced-sql", "power-bi-advanced"],
        assessment_scores={"R": 72, "SQL": 68, "Power BI": 58, "Statistics": 75},
        learning_path=_onboarding("Analytics Skills Assessment", 2,
                                  ["R", "SQL", "Statistics"]) + [
            _item("advanced-sql", "Advanced SQL for Analytics", "course",
                  20, "in-progress", 80, ["SQL", "Database Optimization", "Data Warehousing"]),
            _item("power-bi-advanced", "Advanced Power BI Development", "course",
                  18, "in-progress", 35, ["Power BI", "DAX", "Data Modeling"]),
            _item("python-intro", "Python for Data Analysis", "course",
                  25, "not-started", 0, ["Python", "Pandas", "NumPy"]),
        ],
        last_active=_ts("2024-01-12T11:45:00Z"),
    ),
]


# ─────────────────────────────────────────────────────────────────────────────
# Course catalogue
# ─────────────────────────────────────────────────────────────────────────────

COURSE_CATALOG: list[Course] = [
    Course(id="js-fundamentals", title="JavaScript Fundamentals",
           description="Learn the core concepts of JavaScript programming",
           category="Programming", level="beginner", estimated_hours=16,
           skills=["JavaScript", "DOM Manipulation", "ES6+"],
           rating=4.5, enrolled_count=1250, completion_rate=85),
    Course(id="react-basics", title="React.js Basics",
           description="Introduction to React.js framework and component-based development",
           category="Frontend", level="beginner", estimated_hours=20,
           skills=["React", "JSX", "State Management"],
           rating=4.7, enrolled_count=890, completion_rate=78),
    Course(id="advanced-react", title="Advanced React Patterns",
           description="Master advanced React concepts, hooks, and performance optimization",
           category="Frontend", level="advanced", estimated_hours=24,
           skills=["React", "Hooks", "Performance", "Context API"],
           rating=4.8, enrolled_count=456, completion_rate=72),
    Course(id="node-backend", title="Node.js Backend Development",
           description="Build scalable backend applications with Node.js and Express",
           category="Backend", level="intermediate", estimated_hours=32,
           skills=["Node.js", "Express", "MongoDB", "REST APIs"],
           rating=4.6, enrolled_count=678, completion_rate=68),
    Course(id="python-data-analysis", title="Python for Data Analysis",
           description="Use Python libraries for data manipulation and analysis",
           category="Data Science", level="intermediate", estimated_hours=28,
           skills=["Python", "Pandas", "NumPy", "Matplotlib"],
           rating=4.9, enrolled_count=734, completion_rate=82),
    Course(id="machine-learning", title="Machine Learning Fundamentals",
           description="Introduction to machine learning algorithms and applications",
           category="Data Science", level="intermediate", estimated_hours=35,
           skills=["Machine Learning", "Scikit-learn", "Statistics", "Python"],
           rating=4.7, enrolled_count=567, completion_rate=65),
    Course(id="system-design", title="System Design Fundamentals",
           description="Learn to design scalable and reliable systems",
           category="Architecture", level="advanced", estimated_hours=28,
           skills=["System Design", "Scalability", "Load Balancing", "Databases"],
           rating=4.8, enrolled_count=345, completion_rate=58),
    Course(id="spring-boot-advanced", title="Advanced Spring Boot",
           description="Master Spring Boot for enterprise applications",
           category="Backend", level="intermediate", estimated_hours=30,
           skills=["Spring Boot", "Security", "Testing", "Microservices"],
           rating=4.5, enrolled_count=423, completion_rate=71),
]


# ─────────────────────────────────────────────────────────────────────────────
# Sample assessments
# ─────────────────────────────────────────────────────────────────────────────

ASSESSMENTS: list[Assessment] = [
    Assessment(
        id="js-assessment",
        title="JavaScript Skills Assessment",
        category="Programming",
        passing_score=70,
        time_limit=60,
        questions=[
            Question(id="js1",
                     text="What is the correct way to declare a variable in modern JavaScript?",
                     options=["var x = 5", "let x = 5", "const x = 5",
                              "Both let and const are correct"],
                     correct_answer=3, difficulty="easy", skill="JavaScript"),
            Question(id="js2",
                     text="What does the spread operator (...) do in JavaScript?",
                     options=["Creates a new array", "Spreads array elements",
                              "Copies object properties",
                              "Both spreads array elements and copies object properties"],
                     correct_answer=3, difficulty="medium", skill="JavaScript"),
        ],
    ),
    Assessment(
        id="react-assessment",
        title="React.js Skills Assessment",
        category="Frontend",
        passing_score=75,
        time_limit=45,
        questions=[
            Question(id="react1",
                     text="What is the purpose of useEffect hook in React?",
                     options=["To manage component state", "To handle side effects",
                              "To render components", "To handle events"],
                     correct_answer=1, difficulty="medium", skill="React"),
            Question(id="react2",
                     text="How do you pass data from parent to child component?",
                     options=["Using state", "Using props", "Using context", "Using refs"],
                     correct_answer=1, difficulty="easy", skill="React"),
        ],
    ),
]


# ─────────────────────────────────────────────────────────────────────────────
# Admin overview aggregates (organisation-wide, not derived from EMPLOYEES)
# ─────────────────────────────────────────────────────────────────────────────

DEPARTMENT_PROGRESS: list[DepartmentProgress] = [
    DepartmentProgress(department="Software Development", completed=145, in_progress=89, not_started=34),
    DepartmentProgress(department="Data Analytics",       completed=78,  in_progress=56, not_started=23),
    DepartmentProgress(department="DevOps",               completed=34,  in_progress=28, not_started=15),
    DepartmentProgress(department="Quality Assurance",    completed=67,  in_progress=45, not_started=18),
]

SKILL_GAP_ANALYSIS: list[SkillGapRow] = [
    SkillGapRow(skill="JavaScript",       current_level=65, target_level=85, gap=20),
    SkillGapRow(skill="React",            current_level=58, target_level=80, gap=22),
    SkillGapRow(skill="Python",           current_level=72, target_level=90, gap=18),
    SkillGapRow(skill="Machine Learning", current_level=45, target_level=75, gap=30),
    SkillGapRow(skill="System Design",    current_level=35, target_level=70, gap=35),
]

MONTHLY_PROGRESS: list[MonthlyProgress] = [
    MonthlyProgress(month="Aug", completed=45,  started=67),
    MonthlyProgress(month="Sep", completed=62,  started=78),
    MonthlyProgress(month="Oct", completed=78,  started=89),
    MonthlyProgress(month="Nov", completed=89,  started=95),
    MonthlyProgress(month="Dec", completed=102, started=112),
    MonthlyProgress(month="Jan", completed=118, started=125),
]


# ─── Lookups ──────────────────────────────────────────────────────────────────

def get_user(username: str) -> Optional[UserRecord]:
    """Fetch a credential record by username. Returns None if absent."""
    return next((u for u in USERS if u.username == username), None)


def get_employee(username: str) -> Optional[Employee]:
    """Fetch an employee learning profile by username. Returns None if absent."""
    return next((e for e in EMPLOYEES if e.username == username), None)


def get_employee_or_raise(username: str) -> Employee:
    employee = get_employee(username)
    if employee is None:
        raise EmployeeNotFoundError(f"Employee data not found for {username!r}")
    return employee


def get_course(course_id: str) -> Optional[Course]:
    return next((c for c in COURSE_CATALOG if c.id == course_id), None)


def course_titles(course_ids: list[str]) -> list[str]:
    """Catalogue titles for *course_ids*; ids with no catalogue entry are shown as-is."""
    titles = []
    for course_id in course_ids:
        course = get_course(course_id)
        titles.append(course.title if course else course_id)
    return titles


def get_assessment(assessment_id: str) -> Optional[Assessment]:
    return next((a for a in ASSESSMENTS if a.id == assessment_id), None)

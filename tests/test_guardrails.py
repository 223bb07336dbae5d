"""
Tests for the dataset consistency checks (D-01 … D-08).
Run: python -m pytest tests/ -v
"""
from factories import make_assessment, make_employee, make_item, make_user

from learning_hub.guardrails import (
    AssessmentGuardrails,
    GuardrailLevel,
    GuardrailsPipeline,
    IdentityGuardrails,
    LearningPathGuardrails,
)
from learning_hub.mock_data import ASSESSMENTS, EMPLOYEES, USERS


def _codes(result):
    return [v.code for v in result.violations]


class TestBundledDataset:
    def test_dataset_is_clean(self):
        result = GuardrailsPipeline().check_dataset(USERS, EMPLOYEES, ASSESSMENTS)
        assert result.passed
        assert result.violations == []
        assert "passed" in result.summary()


class TestLearningPathRules:
    def setup_method(self):
        self.guard = LearningPathGuardrails()

    def test_d01_progress_out_of_range_warns(self):
        emp = make_employee(items=[make_item("a", status="in-progress", progress=130)])
        result = self.guard.check(emp)
        assert "D-01" in _codes(result)
        assert result.passed
        assert result.warnings

    def test_d02_completed_without_full_progress(self):
        emp = make_employee(items=[make_item("a", status="completed", progress=80)])
        assert _codes(self.guard.check(emp)) == ["D-02"]

    def test_d02_not_started_with_progress(self):
        emp = make_employee(items=[make_item("a", status="not-started", progress=10)])
        assert _codes(self.guard.check(emp)) == ["D-02"]

    def test_d03_score_out_of_range(self):
        emp = make_employee(scores={"Python": 105})
        assert "D-03" in _codes(self.guard.check(emp))

    def test_d04_missing_prerequisite_warns(self):
        emp = make_employee(items=[make_item("a", prerequisite="ghost")])
        result = self.guard.check(emp)
        assert _codes(result) == ["D-04"]
        assert result.violations[0].level == GuardrailLevel.WARN

    def test_d05_cycle_blocks(self):
        emp = make_employee(items=[
            make_item("a", prerequisite="b"),
            make_item("b", prerequisite="a"),
        ])
        result = self.guard.check(emp)
        assert "D-05" in _codes(result)
        assert result.blocked
        assert not result.passed


class TestIdentityRules:
    def setup_method(self):
        self.guard = IdentityGuardrails()

    def test_consistent_pair(self):
        users = [make_user("boss", role="manager", employees=["worker"]),
                 make_user("worker", manager="boss")]
        result = self.guard.check(users, [make_employee("worker")])
        assert result.violations == []

    def test_d06_manager_missing_back_reference(self):
        users = [make_user("boss", role="manager", employees=[]),
                 make_user("worker", manager="boss")]
        assert _codes(self.guard.check(users, [make_employee("worker")])) == ["D-06"]

    def test_d06_manager_lists_stranger(self):
        users = [make_user("boss", role="manager", employees=["other"]),
                 make_user("other", manager=None)]
        assert "D-06" in _codes(self.guard.check(users, [make_employee("other")]))

    def test_d06_manager_not_a_manager_account(self):
        users = [make_user("peer"), make_user("worker", manager="peer")]
        employees = [make_employee("peer"), make_employee("worker")]
        assert _codes(self.guard.check(users, employees)) == ["D-06"]

    def test_d07_employee_without_profile(self):
        result = self.guard.check([make_user("ghost")], [])
        assert _codes(result) == ["D-07"]
        assert result.passed


class TestAssessmentRules:
    def test_d08_answer_index_out_of_range_blocks(self):
        result = AssessmentGuardrails().check(make_assessment([0, 4]))
        assert _codes(result) == ["D-08"]
        assert result.blocked

    def test_valid_assessment(self):
        assert AssessmentGuardrails().check(make_assessment([0, 3])).violations == []


class TestPipelineMerge:
    def test_merge_keeps_all_violations(self):
        gp = GuardrailsPipeline()
        a = gp.check_employee(make_employee(items=[make_item("a", prerequisite="ghost")]))
        b = gp.check_assessment(make_assessment([9]))
        merged = gp.merge(a, b)
        assert _codes(merged) == ["D-04", "D-08"]
        assert merged.blocked

    def test_summary_lists_codes(self):
        gp = GuardrailsPipeline()
        result = gp.check_employee(make_employee(scores={"x": -1}))
        assert "[D-03]" in result.summary()

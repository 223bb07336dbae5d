"""
Tests for the simulated profile analysis.
"""
import random

from factories import make_employee

from learning_hub.mock_data import get_employee
from learning_hub.profile_agent import ProfileAgent, ProfileAnalysis


class TestProfileAgent:
    def test_one_insight_per_skill_in_order(self):
        emp = get_employee("emp4")
        analysis = ProfileAgent(seed=1).analyse(emp)
        assert [s.name for s in analysis.insights] == emp.skills

    def test_scores_within_simulated_ranges(self):
        analysis = ProfileAgent(seed=7).analyse(make_employee(skills=[f"s{i}" for i in range(50)]))
        for s in analysis.insights:
            assert 60 <= s.proficiency <= 89
            assert 80 <= s.market_demand <= 99

    def test_same_seed_same_analysis(self):
        emp = get_employee("emp1")
        assert ProfileAgent(seed=42).analyse(emp) == ProfileAgent(seed=42).analyse(emp)

    def test_injected_rng_is_used(self):
        emp = get_employee("emp2")
        a = ProfileAgent(rng=random.Random(3)).analyse(emp)
        b = ProfileAgent(seed=3).analyse(emp)
        assert a == b

    def test_focus_is_highest_demand_skill(self):
        analysis = ProfileAgent(seed=5).analyse(get_employee("emp5"))
        top = max(s.market_demand for s in analysis.insights)
        focus = next(s for s in analysis.insights if s.name == analysis.focus_skill)
        assert focus.market_demand == top
        assert analysis.focus_skill in analysis.focus_message

    def test_top_insights_are_first_three(self):
        analysis = ProfileAgent(seed=9).analyse(get_employee("emp4"))
        assert [s.name for s in analysis.top_insights] == ["Python", "SQL", "Tableau"]

    def test_no_skills(self):
        analysis = ProfileAgent(seed=1).analyse(make_employee(skills=[]))
        assert analysis.insights == []
        assert analysis.focus_skill is None
        assert "Add skills" in analysis.focus_message

    def test_empty_analysis_has_no_top_insights(self):
        analysis = ProfileAnalysis(employee="x")
        assert analysis.top_insights == []

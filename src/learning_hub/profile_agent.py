"""
profile_agent.py – Simulated skill profile analysis
===================================================
Produces the "AI analysis" card on the learner Profile tab.  Scores are
simulated: proficiency 60–89 and market demand 80–99 per listed skill,
drawn from an injectable random source so a seeded run is reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from learning_hub.models import Employee


@dataclass
class SkillInsight:
    name:           str
    proficiency:    int   # 60–89, simulated
    market_demand:  int   # 80–99, simulated


@dataclass
class ProfileAnalysis:
    employee:       str
    insights:       list[SkillInsight] = field(default_factory=list)
    focus_skill:    Optional[str] = None

    @property
    def top_insights(self) -> list[SkillInsight]:
        """First three skills, in the order the employee lists them."""
        return self.insights[:3]

    @property
    def focus_message(self) -> str:
        if not self.focus_skill:
            return "Add skills to your profile to receive a focus recommendation."
        return (
            f"Focus on {self.focus_skill} to maximize career growth potential. "
            "High market demand detected."
        )


class ProfileAgent:
    """Simulated per-skill proficiency / demand analysis."""

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        self._rng = rng or random.Random(seed)

    def analyse(self, employee: Employee) -> ProfileAnalysis:
        insights = [
            SkillInsight(
                name          = skill,
                proficiency   = self._rng.randint(60, 89),
                market_demand = self._rng.randint(80, 99),
            )
            for skill in employee.skills
        ]
        # max() keeps the first skill on ties
        focus = max(insights, key=lambda s: s.market_demand).name if insights else None
        return ProfileAnalysis(employee=employee.username, insights=insights, focus_skill=focus)

"""
Tests for the assessment catalogue, the adaptive quiz and dataset scoring.
"""
import pytest

from factories import make_assessment

from learning_hub.assessment_agent import (
    ASSESSMENT_CATALOGUE,
    QUIZ_QUESTIONS,
    QUIZ_TIME_LIMIT_S,
    QuizSession,
    QuizState,
    SkillResult,
    format_time,
    get_catalogue_entry,
    score_assessment,
    score_by_skill,
)
from learning_hub.mock_data import get_assessment
from learning_hub.models import ItemStatus


class TestCatalogue:
    def test_action_labels(self):
        assert get_catalogue_entry("js-fundamentals").action_label == "Retake"
        assert get_catalogue_entry("node-backend").action_label == "Continue"
        assert get_catalogue_entry("python-data").action_label == "Start Assessment"

    def test_only_completed_entries_have_score(self):
        for entry in ASSESSMENT_CATALOGUE:
            assert (entry.score is not None) == (entry.status == ItemStatus.COMPLETED)

    def test_unknown_entry(self):
        assert get_catalogue_entry("nope") is None


class TestQuizSession:
    def test_initial_state(self):
        quiz = QuizSession()
        assert quiz.state == QuizState.IN_PROGRESS
        assert quiz.current_index == 0
        assert quiz.current_question is QUIZ_QUESTIONS[0]
        assert quiz.progress_pct == pytest.approx(20.0)
        assert quiz.time_remaining == QUIZ_TIME_LIMIT_S

    def test_answers_advance_until_complete(self):
        quiz = QuizSession()
        for _ in range(len(QUIZ_QUESTIONS) - 1):
            assert quiz.answer(1) is None
        results = quiz.answer(1)
        assert quiz.state == QuizState.COMPLETED
        assert quiz.current_question is None
        assert [r.skill for r in results] == [q.skill for q in QUIZ_QUESTIONS]
        assert all(r.score == 100 for r in results)

    def test_wrong_answers_score_zero(self):
        quiz = QuizSession()
        for _ in QUIZ_QUESTIONS:
            quiz.answer(0)
        assert all(r.score == 0 for r in quiz.results)

    def test_answer_after_completion_raises(self):
        quiz = QuizSession()
        for _ in QUIZ_QUESTIONS:
            quiz.answer(1)
        with pytest.raises(RuntimeError):
            quiz.answer(1)

    def test_out_of_range_option_rejected(self):
        quiz = QuizSession()
        with pytest.raises(ValueError):
            quiz.answer(4)
        assert quiz.answers == []

    def test_empty_quiz_is_complete(self):
        quiz = QuizSession(questions=[])
        assert quiz.state == QuizState.COMPLETED
        assert quiz.current_question is None
        assert quiz.progress_pct == 100.0

    def test_tick_never_negative(self):
        quiz = QuizSession(time_remaining=5)
        quiz.tick(3)
        assert quiz.time_remaining == 2
        quiz.tick(10)
        assert quiz.time_remaining == 0


class TestScoring:
    def test_score_by_skill_groups(self):
        questions = QUIZ_QUESTIONS[:2] + [QUIZ_QUESTIONS[0]]
        results = score_by_skill(questions, [1, 0, 0])
        assert results == [SkillResult("JavaScript", 50), SkillResult("React", 0)]

    @pytest.mark.parametrize("score,band", [(80, "strong"), (60, "moderate"), (59, "weak")])
    def test_bands(self, score, band):
        assert SkillResult("x", score).band == band

    def test_format_time(self):
        assert format_time(1800) == "30:00"
        assert format_time(65) == "1:05"
        assert format_time(-3) == "0:00"

    def test_dataset_assessment_pass(self):
        result = score_assessment(get_assessment("js-assessment"), [3, 3])
        assert (result.correct, result.total, result.score_pct, result.passed) == (2, 2, 100, True)

    def test_dataset_assessment_below_pass_mark(self):
        result = score_assessment(get_assessment("js-assessment"), [3, 0])
        assert result.score_pct == 50
        assert not result.passed

    def test_pass_mark_is_inclusive(self):
        result = score_assessment(make_assessment([0, 0, 0, 0], passing_score=75), [0, 0, 0, 1])
        assert result.score_pct == 75
        assert result.passed

    def test_wrong_answer_count(self):
        with pytest.raises(ValueError):
            score_assessment(get_assessment("react-assessment"), [1])

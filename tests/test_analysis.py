import random

import pytest

from quizgen.analysis import (
	analyze_learning_patterns,
	calculate_performance_prediction,
	calculate_performance_trend,
	classify_learning_velocity,
	count_completed_lessons,
	find_knowledge_gaps,
)
from quizgen.context import LearnerContext


def _attempts(scores):
	# newest first
	return [{"score": s} for s in scores]


@pytest.mark.parametrize("scores", [[], [100], [40, 90]])
def test_trend_needs_three_attempts(scores):
	assert calculate_performance_trend(_attempts(scores)) == "insufficient_data"


def test_trend_improving_when_recent_window_beats_older():
	scores = [90] * 5 + [80] * 5
	assert calculate_performance_trend(_attempts(scores)) == "improving"


def test_trend_declining_when_recent_window_drops():
	scores = [70] * 5 + [80] * 5
	assert calculate_performance_trend(_attempts(scores)) == "declining"


def test_trend_margin_is_exclusive():
	scores = [85] * 5 + [80] * 5
	assert calculate_performance_trend(_attempts(scores)) == "stable"


def test_trend_stable_without_older_window():
	assert calculate_performance_trend(_attempts([20, 90, 55])) == "stable"


def test_trend_ignores_attempts_beyond_two_windows():
	scores = [90] * 5 + [80] * 5 + [0] * 10
	assert calculate_performance_trend(_attempts(scores)) == "improving"


def test_missing_scores_count_as_zero():
	attempts = [{"score": None}] * 5 + [{"score": 50}] * 5
	assert calculate_performance_trend(attempts) == "declining"


@pytest.mark.parametrize(
	"completed,expected",
	[(0, "slow"), (8, "slow"), (9, "moderate"), (15, "moderate"), (16, "fast")],
)
def test_velocity_thresholds(completed, expected):
	assert classify_learning_velocity(completed) == expected


def test_completed_lessons_require_full_completion():
	progress = [
		{"progress_type": "lesson_completion", "percentage": 100},
		{"progress_type": "lesson_completion", "percentage": 99},
		{"progress_type": "quiz_completion", "percentage": 100},
		{"progress_type": "lesson_completion", "percentage": 120},
	]
	assert count_completed_lessons(progress) == 2


def test_knowledge_gaps_below_seventy():
	graph = [
		{"topic": "sets", "mastery_level": 95},
		{"topic": "limits", "mastery_level": 70},
		{"topic": "series", "mastery_level": 69.5},
		{"topic": "proofs", "mastery_level": 10},
	]
	assert find_knowledge_gaps(graph) == ["series", "proofs"]


def test_prediction_applies_all_adjustments():
	assert calculate_performance_prediction(80, "improving", "fast", 2) == 84
	assert calculate_performance_prediction(80, "declining", "slow", 0) == 72
	assert calculate_performance_prediction(80, "insufficient_data", "moderate", 0) == 80


def test_prediction_always_clamped_to_percentage_range():
	rng = random.Random(20240501)
	trends = ["improving", "declining", "stable", "insufficient_data"]
	velocities = ["fast", "moderate", "slow"]
	for _ in range(2000):
		prediction = calculate_performance_prediction(
			rng.uniform(0, 100),
			rng.choice(trends),
			rng.choice(velocities),
			rng.randint(0, 80),
		)
		assert 0 <= prediction <= 100


@pytest.mark.parametrize(
	"avg,trend,velocity,gaps,expected",
	[(100, "improving", "fast", 0, 100), (0, "declining", "slow", 50, 0), (3, "stable", "slow", 0, 0)],
)
def test_prediction_clamps_extremes(avg, trend, velocity, gaps, expected):
	assert calculate_performance_prediction(avg, trend, velocity, gaps) == expected


def test_analyze_uses_defaults_without_history():
	context = LearnerContext(user={"id": "u", "learning_style": None, "difficulty_preference": None})
	analysis = analyze_learning_patterns(context, previous_performance=64)

	assert analysis.avg_quiz_score == 0
	assert analysis.performance_trend == "insufficient_data"
	assert analysis.learning_velocity == "slow"
	assert analysis.knowledge_gaps == []
	assert analysis.performance_prediction == 0
	assert analysis.learning_style == "visual"
	assert analysis.difficulty_preference == "medium"
	assert analysis.optimal_session_length == 45
	assert analysis.previous_performance == 64


def test_analyze_combines_history_and_twin():
	context = LearnerContext(
		user={"id": "u", "learning_style": "kinesthetic", "difficulty_preference": "hard"},
		quiz_attempts=_attempts([90] * 5 + [80] * 5),
		knowledge_graph=[{"topic": "vectors", "mastery_level": 40}],
		progress=[{"progress_type": "lesson_completion", "percentage": 100}] * 16,
		cognitive_twin={"learning_style_profile": {"kinesthetic": 0.7}, "preferred_session_length": 25},
	)
	analysis = analyze_learning_patterns(context)

	assert analysis.avg_quiz_score == 85
	assert analysis.performance_trend == "improving"
	assert analysis.learning_velocity == "fast"
	assert analysis.knowledge_gaps == ["vectors"]
	# 85 + 5 + 3 - 2
	assert analysis.performance_prediction == 91
	assert analysis.learning_style == "kinesthetic"
	assert analysis.optimal_session_length == 25
	assert analysis.cognitive_profile == {"kinesthetic": 0.7}

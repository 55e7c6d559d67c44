"""
Learning-pattern heuristics over a learner's recent history.

Everything here is pure and synchronous. The prediction is a hand-weighted
score, not a fitted model.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from .context import LearnerContext

TREND_WINDOW = 5
TREND_MARGIN = 5.0
MIN_ATTEMPTS_FOR_TREND = 3
GAP_MASTERY_THRESHOLD = 70.0
DEFAULT_SESSION_LENGTH = 45


@dataclass(frozen=True)
class LearningAnalysis:
	avg_quiz_score: float
	performance_trend: str
	learning_velocity: str
	knowledge_gaps: List[str]
	performance_prediction: float
	learning_style: str = "visual"
	difficulty_preference: str = "medium"
	optimal_session_length: int = DEFAULT_SESSION_LENGTH
	cognitive_profile: Dict[str, Any] = field(default_factory=dict)
	previous_performance: float = 75.0


def _score(attempt: Dict[str, Any]) -> float:
	return float(attempt.get("score") or 0)


def _mean(values: Sequence[float]) -> float:
	return sum(values) / len(values) if values else 0.0


def calculate_performance_trend(quiz_attempts: Sequence[Dict[str, Any]]) -> str:
	"""Compare the newest window of scores with the window before it.

	``quiz_attempts`` must be ordered newest first.
	"""
	if len(quiz_attempts) < MIN_ATTEMPTS_FOR_TREND:
		return "insufficient_data"
	recent = [_score(a) for a in quiz_attempts[:TREND_WINDOW]]
	older = [_score(a) for a in quiz_attempts[TREND_WINDOW:TREND_WINDOW * 2]]
	recent_avg = _mean(recent)
	older_avg = _mean(older) if older else recent_avg
	if recent_avg > older_avg + TREND_MARGIN:
		return "improving"
	if recent_avg < older_avg - TREND_MARGIN:
		return "declining"
	return "stable"


def count_completed_lessons(progress: Sequence[Dict[str, Any]]) -> int:
	return sum(
		1
		for p in progress
		if p.get("progress_type") == "lesson_completion" and float(p.get("percentage") or 0) >= 100
	)


def classify_learning_velocity(completed_lessons: int) -> str:
	if completed_lessons > 15:
		return "fast"
	if completed_lessons > 8:
		return "moderate"
	return "slow"


def find_knowledge_gaps(knowledge_graph: Sequence[Dict[str, Any]]) -> List[str]:
	return [
		kg["topic"]
		for kg in knowledge_graph
		if float(kg.get("mastery_level") or 0) < GAP_MASTERY_THRESHOLD
	]


def calculate_performance_prediction(
	avg_score: float,
	trend: str,
	velocity: str,
	knowledge_gap_count: int,
) -> float:
	prediction = float(avg_score)
	if trend == "improving":
		prediction += 5
	elif trend == "declining":
		prediction -= 5
	if velocity == "fast":
		prediction += 3
	elif velocity == "slow":
		prediction -= 3
	prediction -= knowledge_gap_count * 2
	return max(0.0, min(100.0, prediction))


def analyze_learning_patterns(context: LearnerContext, previous_performance: float = 75.0) -> LearningAnalysis:
	attempts = context.quiz_attempts
	avg_score = _mean([_score(a) for a in attempts])
	trend = calculate_performance_trend(attempts)
	velocity = classify_learning_velocity(count_completed_lessons(context.progress))
	gaps = find_knowledge_gaps(context.knowledge_graph)

	twin = context.cognitive_twin or {}
	session_length = twin.get("preferred_session_length") or DEFAULT_SESSION_LENGTH
	user = context.user or {}

	return LearningAnalysis(
		avg_quiz_score=avg_score,
		performance_trend=trend,
		learning_velocity=velocity,
		knowledge_gaps=gaps,
		performance_prediction=calculate_performance_prediction(avg_score, trend, velocity, len(gaps)),
		learning_style=user.get("learning_style") or "visual",
		difficulty_preference=user.get("difficulty_preference") or "medium",
		optimal_session_length=int(session_length),
		cognitive_profile=dict(twin.get("learning_style_profile") or {}),
		previous_performance=float(previous_performance),
	)

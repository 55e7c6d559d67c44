from __future__ import annotations
from typing import Any, Dict, List, Sequence

from .analysis import LearningAnalysis

COMMON_MISTAKES = [
	"Rushing through questions without reading carefully",
	"Not using the provided hints and reasoning steps",
	"Guessing without eliminating options first",
	"Not checking work for simple arithmetic errors",
	"Skipping the explanation after answering incorrectly",
]

STUDY_TIPS = [
	"Review the fundamental concepts before taking the quiz",
	"Practice similar problems to build confidence",
	"Use the explanations to understand your mistakes",
	"Take notes on concepts you find challenging",
	"Create flashcards for key formulas and concepts",
]

LEARNING_PATH_SUGGESTIONS = [
	"Complete the prerequisite lessons if you scored below 70%",
	"Move to advanced topics if you scored above 90%",
	"Focus on practice problems in your weak areas",
	"Consider working with a study group or tutor",
]

CONFIDENCE_BUILDING_STRATEGIES = [
	"Start with easier questions to build momentum",
	"Celebrate small victories and progress",
	"Remember that mistakes are part of the learning process",
	"Use the detailed explanations to improve understanding",
]

ENGAGEMENT_OPTIMIZATION = [
	"Take breaks every 15-20 minutes to maintain focus",
	"Use the hints and explanations to deepen understanding",
	"Set small, achievable goals for each study session",
	"Track your progress to stay motivated",
]

MAX_KEY_CONCEPTS = 5


def _key_concepts(learning_objectives: Sequence[str], questions: Sequence[Dict[str, Any]]) -> List[str]:
	source = list(learning_objectives) or [q.get("learning_objective", "") for q in questions]
	concepts: List[str] = []
	for item in source:
		if item and item not in concepts:
			concepts.append(item)
	return concepts[:MAX_KEY_CONCEPTS]


def generate_comprehensive_insights(
	difficulty: str,
	learning_objectives: Sequence[str],
	questions: Sequence[Dict[str, Any]],
) -> Dict[str, Any]:
	if difficulty == "beginner":
		approach = (
			"Take your time and read each question carefully. Focus on understanding the concepts "
			"rather than speed. Use the hints provided to guide your thinking."
		)
	else:
		approach = (
			"Use your knowledge systematically. Eliminate obviously wrong answers first, then work "
			"through the remaining options methodically."
		)
	return {
		"recommended_approach": approach,
		"key_concepts": _key_concepts(learning_objectives, questions),
		"common_mistakes": list(COMMON_MISTAKES),
		"study_tips": list(STUDY_TIPS),
		"learning_path_suggestions": list(LEARNING_PATH_SUGGESTIONS),
		"confidence_building_strategies": list(CONFIDENCE_BUILDING_STRATEGIES),
	}


def generate_personalization(
	analysis: LearningAnalysis,
	learning_style: str,
	previous_performance: float,
) -> Dict[str, Any]:
	if previous_performance > 80:
		difficulty_adjustment = "Consider increasing difficulty to maintain engagement"
	elif previous_performance < 60:
		difficulty_adjustment = "Focus on foundational concepts before advancing"
	else:
		difficulty_adjustment = "Current difficulty level appears appropriate"

	if learning_style == "visual":
		style_adaptation = "Use diagrams, charts, and visual aids to enhance understanding"
	elif learning_style == "auditory":
		style_adaptation = "Explain concepts out loud and discuss with others"
	else:
		style_adaptation = "Use hands-on practice and step-by-step problem solving"

	return {
		"difficulty_adjustment": difficulty_adjustment,
		"learning_style_adaptation": style_adaptation,
		"performance_prediction": analysis.performance_prediction,
		"engagement_optimization": list(ENGAGEMENT_OPTIMIZATION),
	}

from __future__ import annotations
from typing import Optional, Sequence


SYSTEM_PROMPT = (
	"You are an expert educational AI that creates comprehensive, engaging quizzes. "
	"Always respond with valid JSON in the exact format requested."
)

QUIZ_JSON_SCHEMA = """{
  "quiz": {
    "title": "Quiz title",
    "description": "Quiz description",
    "questions": [
      {
        "id": "q1",
        "question": "Question text",
        "question_type": "multiple_choice|true_false|fill_blank|essay|interactive",
        "options": ["Option A", "Option B", "Option C", "Option D"],
        "correct_answer": "Correct answer or array of correct answers",
        "explanation": "Detailed explanation of the answer",
        "difficulty": "beginner|intermediate|advanced",
        "learning_objective": "What this question tests",
        "hints": ["Hint 1", "Hint 2"],
        "reasoning_steps": ["Step 1", "Step 2", "Step 3"],
        "real_world_application": "How this applies in real life",
        "common_mistakes": ["Common mistake 1", "Common mistake 2"]
      }
    ],
    "time_limit_minutes": 30,
    "passing_score": 70,
    "adaptive_difficulty": true,
    "personalized_feedback": true
  }
}"""


def _join(items: Sequence[str]) -> str:
	return ", ".join(items) if items else "none"


def build_quiz_prompt(
	*,
	subject: str,
	topic: str,
	difficulty: str,
	question_count: int,
	quiz_type: str,
	learning_objectives: Sequence[str],
	learning_style: str,
	performance_prediction: float,
	knowledge_gaps: Sequence[str],
	time_constraint: Optional[int] = None,
) -> str:
	lines = [
		"You are an expert educational AI that creates comprehensive, engaging quizzes. "
		"Generate a quiz with the following specifications:",
		"",
		f"Subject: {subject}",
		f"Topic: {topic}",
		f"Difficulty Level: {difficulty}",
		f"Number of Questions: {question_count}",
		f"Quiz Type: {quiz_type}",
		f"Learning Objectives: {_join(learning_objectives)}",
		f"User Learning Style: {learning_style}",
		f"Performance Prediction: {performance_prediction:g}%",
		f"Knowledge Gaps: {_join(knowledge_gaps)}",
	]
	if time_constraint:
		lines.append(f"Time Available: {time_constraint} minutes")
	lines += [
		"",
		"Create a quiz that:",
		"1. Tests understanding at the appropriate difficulty level",
		"2. Includes question types that match the requested quiz type",
		"3. Provides clear explanations for each answer",
		"4. Includes hints and reasoning steps",
		"5. Connects to real-world applications",
		"6. Identifies common mistakes",
		"7. Adapts to the user's learning style and knowledge gaps",
		"",
		"Format the response as JSON with this exact structure:",
		QUIZ_JSON_SCHEMA,
		"",
		"Return ONLY the JSON object. No markdown, no extra commentary.",
	]
	return "\n".join(lines)

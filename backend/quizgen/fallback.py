from __future__ import annotations
import copy
import random
from typing import Any, Dict, List, Optional, Sequence

from .analysis import LearningAnalysis


# subject -> topic -> difficulty -> authored questions
QUESTION_BANK: Dict[str, Dict[str, Dict[str, List[Dict[str, Any]]]]] = {
	"mathematics": {
		"algebra": {
			"beginner": [
				{
					"id": "1",
					"question": "What is the value of x in the equation 2x + 5 = 13?",
					"question_type": "multiple_choice",
					"options": ["x = 4", "x = 6", "x = 8", "x = 9"],
					"correct_answer": "x = 4",
					"explanation": "To solve: 2x + 5 = 13, subtract 5 from both sides: 2x = 8, then divide by 2: x = 4. This demonstrates the fundamental principle of isolating the variable by performing inverse operations.",
					"difficulty": "beginner",
					"learning_objective": "Solve linear equations with one variable",
					"hints": [
						"Remember to perform the same operation on both sides of the equation",
						"Start by isolating the term with the variable",
						"Use inverse operations: addition/subtraction, multiplication/division",
					],
					"reasoning_steps": [
						"Identify the equation: 2x + 5 = 13",
						"Subtract 5 from both sides: 2x = 8",
						"Divide both sides by 2: x = 4",
						"Verify: 2(4) + 5 = 8 + 5 = 13 ✓",
					],
					"real_world_application": "This skill is essential for calculating costs, solving problems in physics, and understanding relationships between variables in real-world scenarios.",
					"common_mistakes": [
						"Forgetting to perform operations on both sides",
						"Making arithmetic errors during calculation",
						"Not verifying the solution by substitution",
					],
				},
				{
					"id": "2",
					"question": "Simplify the expression: 3(x + 2) - 2x",
					"question_type": "multiple_choice",
					"options": ["x + 6", "5x + 6", "x + 2", "3x + 4"],
					"correct_answer": "x + 6",
					"explanation": "Distribute: 3(x + 2) - 2x = 3x + 6 - 2x = x + 6. This demonstrates the distributive property and combining like terms.",
					"difficulty": "beginner",
					"learning_objective": "Apply distributive property and combine like terms",
					"hints": [
						"Use the distributive property: a(b + c) = ab + ac",
						"Combine like terms by adding coefficients",
						"Be careful with signs when combining terms",
					],
					"reasoning_steps": [
						"Apply distributive property: 3(x + 2) = 3x + 6",
						"Rewrite expression: 3x + 6 - 2x",
						"Combine like terms: 3x - 2x = x",
						"Final result: x + 6",
					],
					"real_world_application": "This skill is used in calculating areas, simplifying formulas in science and engineering, and solving optimization problems.",
					"common_mistakes": [
						"Incorrectly applying the distributive property",
						"Forgetting to distribute to all terms inside parentheses",
						"Making sign errors when combining like terms",
					],
				},
			],
			"intermediate": [
				{
					"id": "1",
					"question": "Solve the quadratic equation: x² - 5x + 6 = 0",
					"question_type": "multiple_choice",
					"options": ["x = 2, x = 3", "x = 1, x = 6", "x = -2, x = -3", "x = 0, x = 5"],
					"correct_answer": "x = 2, x = 3",
					"explanation": "Factor: (x - 2)(x - 3) = 0, so x = 2 or x = 3. This demonstrates factoring quadratic equations and the zero product property.",
					"difficulty": "intermediate",
					"learning_objective": "Solve quadratic equations by factoring",
					"hints": [
						"Look for two numbers that multiply to 6 and add to -5",
						"Use the zero product property: if ab = 0, then a = 0 or b = 0",
						"Check your solutions by substituting back into the original equation",
					],
					"reasoning_steps": [
						"Identify the quadratic equation: x² - 5x + 6 = 0",
						"Find factors of 6 that add to -5: -2 and -3",
						"Factor: (x - 2)(x - 3) = 0",
						"Apply zero product property: x - 2 = 0 or x - 3 = 0",
						"Solve: x = 2 or x = 3",
					],
					"real_world_application": "Quadratic equations model projectile motion, optimization problems, and many phenomena in physics and engineering.",
					"common_mistakes": [
						"Incorrectly identifying factors",
						"Forgetting to set each factor equal to zero",
						"Making sign errors when factoring",
					],
				},
			],
		},
	},
	"programming": {
		"python": {
			"beginner": [
				{
					"id": "1",
					"question": "What is the output of: print(3 + 2 * 4)",
					"question_type": "multiple_choice",
					"options": ["20", "11", "14", "Error"],
					"correct_answer": "11",
					"explanation": "Order of operations: multiplication first (2*4=8), then addition (3+8=11). Python follows PEMDAS/BODMAS rules for operator precedence.",
					"difficulty": "beginner",
					"learning_objective": "Understand operator precedence in Python",
					"hints": [
						"Remember PEMDAS: Parentheses, Exponents, Multiplication/Division, Addition/Subtraction",
						"Multiplication and division have higher precedence than addition and subtraction",
						"Operations with the same precedence are evaluated left to right",
					],
					"reasoning_steps": [
						"Identify the expression: 3 + 2 * 4",
						"Apply operator precedence: multiplication first",
						"Calculate 2 * 4 = 8",
						"Then addition: 3 + 8 = 11",
						"Print the result: 11",
					],
					"real_world_application": "Understanding operator precedence is crucial for writing correct mathematical expressions in programming and avoiding bugs.",
					"common_mistakes": [
						"Evaluating operations left to right without considering precedence",
						"Forgetting that multiplication comes before addition",
						"Not using parentheses when needed for clarity",
					],
				},
			],
		},
	},
}

CODE_SNIPPETS = [
	"print(2 + 3 * 4)",
	"x = 5\ny = x + 3\nprint(y)",
	"for i in range(3):\n    print(i)",
	"if True:\n    print(\"Hello\")",
]

LEARNING_STYLE_HINTS: Dict[str, List[str]] = {
	"visual": [
		"Try drawing a diagram or flowchart to visualize this problem",
		"Consider using a visual representation to organize your thoughts",
	],
	"auditory": [
		"Try explaining the problem out loud to yourself",
		"Consider discussing this with a study partner",
	],
	"kinesthetic": [
		"Try working through this step by step on paper",
		"Consider using physical objects or manipulatives if applicable",
	],
}

KNOWLEDGE_GAP_HINTS = [
	"This question focuses on a concept you might want to review",
	"Take your time and don't hesitate to ask for clarification",
]

MAX_TIME_LIMIT_MINUTES = 60


def bank_questions(subject: str, topic: str, difficulty: str) -> List[Dict[str, Any]]:
	"""Return deep copies of the authored questions for a triple (empty if unknown)."""
	entries = QUESTION_BANK.get(subject.lower(), {}).get(topic.lower(), {}).get(difficulty.lower(), [])
	return copy.deepcopy(entries)


def generate_random_equation(rng: random.Random) -> str:
	a = rng.randint(2, 6)
	b = rng.randint(1, 10)
	c = rng.randint(5, 24)
	return f"{a}x + {b} = {c}"


def generate_random_code_snippet(rng: random.Random) -> str:
	return rng.choice(CODE_SNIPPETS)


def adjust_difficulty_for_user(difficulty: str, performance_prediction: float) -> str:
	if performance_prediction > 85 and difficulty == "beginner":
		return "intermediate"
	if performance_prediction < 60 and difficulty == "intermediate":
		return "beginner"
	return difficulty


def passing_score_for(performance_prediction: float) -> int:
	if performance_prediction > 80:
		return 85
	if performance_prediction > 60:
		return 75
	return 70


def enhance_question_for_user(
	question: Dict[str, Any],
	learning_style: str,
	knowledge_gaps: Sequence[str],
) -> Dict[str, Any]:
	"""Append learning-style hints, plus review hints when the objective is a known gap."""
	enhanced = dict(question)
	hints = list(enhanced.get("hints") or [])
	hints.extend(LEARNING_STYLE_HINTS.get(learning_style, []))
	gaps = {g.lower() for g in knowledge_gaps}
	if str(enhanced.get("learning_objective", "")).lower() in gaps:
		hints.extend(KNOWLEDGE_GAP_HINTS)
	enhanced["hints"] = hints
	return enhanced


def generate_adaptive_question(
	subject: str,
	topic: str,
	difficulty: str,
	quiz_type: str,
	question_number: int,
	rng: random.Random,
) -> Dict[str, Any]:
	key = (subject.lower(), topic.lower(), difficulty.lower())
	if key == ("mathematics", "algebra", "beginner"):
		template = {
			"question": f"Solve for x: {generate_random_equation(rng)}",
			"learning_objective": "Solve linear equations with one variable",
			"explanation": "This demonstrates solving linear equations using inverse operations.",
		}
	elif key == ("programming", "python", "beginner"):
		template = {
			"question": f"What will this code output: {generate_random_code_snippet(rng)}",
			"learning_objective": "Understand Python syntax and execution",
			"explanation": "This tests your understanding of Python code execution and syntax.",
		}
	else:
		template = {
			"question": f"Sample question {question_number} about {topic}?",
			"learning_objective": f"Master {topic} concepts",
			"explanation": f"This question tests your understanding of {topic}.",
		}

	return {
		"id": str(question_number),
		"question": template["question"],
		"question_type": quiz_type,
		"options": ["Option A", "Option B", "Option C", "Option D"] if quiz_type == "multiple_choice" else None,
		"correct_answer": "Correct Answer",
		"explanation": template["explanation"],
		"difficulty": difficulty,
		"learning_objective": template["learning_objective"],
		"hints": [
			"Read the question carefully",
			"Consider all options before choosing",
			"Use the process of elimination if unsure",
		],
		"reasoning_steps": [
			"Analyze the problem",
			"Apply relevant concepts",
			"Check your work",
			"Verify your answer",
		],
		"real_world_application": f"This concept is important for understanding {topic} in real-world applications.",
		"common_mistakes": [
			"Rushing through the problem",
			"Not reading all options",
			"Making calculation errors",
		],
	}


def _capitalize(text: str) -> str:
	return text[:1].upper() + text[1:]


def generate_fallback_quiz(
	subject: str,
	topic: str,
	difficulty: str,
	question_count: int,
	quiz_type: str,
	analysis: LearningAnalysis,
	learning_style: Optional[str] = None,
	rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
	rng = rng or random.Random()
	style = learning_style or analysis.learning_style

	questions = [
		enhance_question_for_user(q, style, analysis.knowledge_gaps)
		for q in bank_questions(subject, topic, difficulty)[:question_count]
	]
	while len(questions) < question_count:
		questions.append(
			generate_adaptive_question(subject, topic, difficulty, quiz_type, len(questions) + 1, rng)
		)

	prediction = analysis.performance_prediction
	return {
		"title": f"{_capitalize(subject)} - {_capitalize(topic)} Mastery Quiz",
		"description": (
			f"A comprehensive assessment designed to evaluate your understanding of {topic} in {subject}. "
			"This quiz adapts to your learning style and provides detailed feedback to help you improve."
		),
		"questions": questions,
		"time_limit_minutes": min(analysis.optimal_session_length, MAX_TIME_LIMIT_MINUTES),
		"passing_score": passing_score_for(prediction),
		"adaptive_difficulty": True,
		"personalized_feedback": True,
		"difficulty": adjust_difficulty_for_user(difficulty, prediction),
	}

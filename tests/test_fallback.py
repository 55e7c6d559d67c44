import random
import re

import pytest

from quizgen.analysis import LearningAnalysis
from quizgen.fallback import (
	KNOWLEDGE_GAP_HINTS,
	LEARNING_STYLE_HINTS,
	QUESTION_BANK,
	adjust_difficulty_for_user,
	bank_questions,
	generate_fallback_quiz,
	generate_random_equation,
	passing_score_for,
)


def _analysis(prediction=75.0, gaps=(), session=45, style="visual"):
	return LearningAnalysis(
		avg_quiz_score=prediction,
		performance_trend="stable",
		learning_velocity="moderate",
		knowledge_gaps=list(gaps),
		performance_prediction=prediction,
		learning_style=style,
		optimal_session_length=session,
	)


@pytest.mark.parametrize(
	"difficulty,prediction,expected",
	[
		("beginner", 90, "intermediate"),
		("beginner", 85, "beginner"),
		("intermediate", 50, "beginner"),
		("intermediate", 60, "intermediate"),
		("intermediate", 95, "intermediate"),
		("advanced", 10, "advanced"),
	],
)
def test_adjust_difficulty(difficulty, prediction, expected):
	assert adjust_difficulty_for_user(difficulty, prediction) == expected


@pytest.mark.parametrize("prediction,expected", [(95, 85), (80.5, 85), (80, 75), (61, 75), (60, 70), (0, 70)])
def test_passing_score_tiers(prediction, expected):
	assert passing_score_for(prediction) == expected


def test_bank_questions_are_used_first_and_keep_authored_fields():
	quiz = generate_fallback_quiz("Mathematics", "Algebra", "beginner", 2, "multiple_choice", _analysis())
	authored = QUESTION_BANK["mathematics"]["algebra"]["beginner"]

	assert [q["id"] for q in quiz["questions"]] == ["1", "2"]
	for produced, expected in zip(quiz["questions"], authored):
		for key in ("question", "options", "correct_answer", "explanation", "learning_objective", "reasoning_steps"):
			assert produced[key] == expected[key]
	assert quiz["questions"][0]["correct_answer"] == "x = 4"
	assert quiz["questions"][1]["correct_answer"] == "x + 6"


def test_bank_is_truncated_to_requested_count():
	quiz = generate_fallback_quiz("mathematics", "algebra", "beginner", 1, "multiple_choice", _analysis())
	assert len(quiz["questions"]) == 1
	assert quiz["questions"][0]["id"] == "1"


def test_learning_style_hints_are_appended():
	quiz = generate_fallback_quiz(
		"mathematics", "algebra", "beginner", 1, "multiple_choice", _analysis(), learning_style="kinesthetic"
	)
	hints = quiz["questions"][0]["hints"]
	authored = QUESTION_BANK["mathematics"]["algebra"]["beginner"][0]["hints"]

	assert hints[: len(authored)] == authored
	assert hints[len(authored):] == LEARNING_STYLE_HINTS["kinesthetic"]


def test_gap_hints_added_when_objective_is_a_gap():
	analysis = _analysis(gaps=["solve linear equations with one variable"])
	quiz = generate_fallback_quiz("mathematics", "algebra", "beginner", 2, "multiple_choice", analysis)

	assert quiz["questions"][0]["hints"][-2:] == KNOWLEDGE_GAP_HINTS
	assert not set(KNOWLEDGE_GAP_HINTS) & set(quiz["questions"][1]["hints"])


def test_filler_questions_continue_numbering():
	quiz = generate_fallback_quiz(
		"mathematics", "algebra", "beginner", 5, "multiple_choice", _analysis(), rng=random.Random(7)
	)
	questions = quiz["questions"]

	assert [q["id"] for q in questions] == ["1", "2", "3", "4", "5"]
	for q in questions[2:]:
		assert re.fullmatch(r"Solve for x: [2-6]x \+ ([1-9]|10) = ([5-9]|1\d|2[0-4])", q["question"])
		assert q["correct_answer"] == "Correct Answer"
		assert q["options"] == ["Option A", "Option B", "Option C", "Option D"]


def test_python_filler_uses_code_snippets():
	quiz = generate_fallback_quiz(
		"programming", "python", "beginner", 3, "multiple_choice", _analysis(), rng=random.Random(1)
	)
	assert quiz["questions"][0]["correct_answer"] == "11"
	for q in quiz["questions"][1:]:
		assert q["question"].startswith("What will this code output: ")


def test_unknown_triple_produces_generic_questions():
	quiz = generate_fallback_quiz("history", "rome", "advanced", 3, "essay", _analysis())

	assert len(quiz["questions"]) == 3
	first = quiz["questions"][0]
	assert first["question"] == "Sample question 1 about rome?"
	assert first["question_type"] == "essay"
	assert first["options"] is None
	assert first["learning_objective"] == "Master rome concepts"


def test_quiz_level_fields():
	quiz = generate_fallback_quiz(
		"mathematics", "algebra", "beginner", 2, "multiple_choice", _analysis(prediction=90, session=40)
	)
	assert quiz["title"] == "Mathematics - Algebra Mastery Quiz"
	assert "algebra in mathematics" in quiz["description"]
	assert quiz["time_limit_minutes"] == 40
	assert quiz["passing_score"] == 85
	assert quiz["difficulty"] == "intermediate"
	assert quiz["adaptive_difficulty"] is True
	assert quiz["personalized_feedback"] is True


def test_time_limit_is_capped_at_an_hour():
	quiz = generate_fallback_quiz("history", "rome", "advanced", 1, "essay", _analysis(session=90))
	assert quiz["time_limit_minutes"] == 60


def test_bank_copies_do_not_leak_mutations():
	quiz = generate_fallback_quiz("mathematics", "algebra", "beginner", 2, "multiple_choice", _analysis())
	quiz["questions"][0]["hints"].append("scribble")
	quiz["questions"][0]["options"].append("x = 0")

	fresh = bank_questions("mathematics", "algebra", "beginner")
	assert "scribble" not in fresh[0]["hints"]
	assert fresh[0]["options"] == ["x = 4", "x = 6", "x = 8", "x = 9"]
	assert len(QUESTION_BANK["mathematics"]["algebra"]["beginner"][0]["hints"]) == 3


def test_random_equation_is_reproducible_with_seed():
	assert generate_random_equation(random.Random(3)) == generate_random_equation(random.Random(3))
	for seed in range(50):
		assert re.fullmatch(r"\dx \+ \d+ = \d+", generate_random_equation(random.Random(seed)))

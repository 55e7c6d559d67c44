"""
Quiz content generation: one chat-completion attempt, template fallback otherwise.

The outcome is returned as a tagged value (``Generated`` or ``Fallback``) so
callers can record provenance without inspecting exceptions.
"""

from __future__ import annotations
import json
import logging
import random
import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from pydantic import ValidationError

from .analysis import LearningAnalysis
from .exceptions import LLMError, QuizParseError
from .fallback import generate_fallback_quiz
from .openai_client import ChatCompletionClient
from .prompts import SYSTEM_PROMPT, build_quiz_prompt
from .schemas import QuizContent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Generated:
	content: QuizContent
	model: str
	source: str = "llm"


@dataclass(frozen=True)
class Fallback:
	content: QuizContent
	reason: str
	source: str = "fallback"


GenerationOutcome = Union[Generated, Fallback]


def extract_json_object(text: str) -> Any:
	try:
		return json.loads(text)
	except (TypeError, ValueError):
		pass
	code_block = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text or "")
	if code_block:
		try:
			return json.loads(code_block.group(1))
		except ValueError:
			pass
	first = (text or "").find("{")
	last = (text or "").rfind("}")
	if first != -1 and last > first:
		try:
			return json.loads(text[first : last + 1])
		except ValueError:
			pass
	raise QuizParseError("Model output is not valid JSON", raw_text=text)


def parse_quiz_payload(text: str, question_count: Optional[int] = None) -> QuizContent:
	data = extract_json_object(text)
	if isinstance(data, dict) and isinstance(data.get("quiz"), dict):
		data = data["quiz"]
	if not isinstance(data, dict):
		raise QuizParseError("Model output is not a JSON object", raw_text=text)
	try:
		content = QuizContent.model_validate(data)
	except ValidationError as err:
		raise QuizParseError(f"Model output does not match the quiz schema: {err.error_count()} errors", raw_text=text) from err
	if question_count is not None and len(content.questions) > question_count:
		content = content.model_copy(update={"questions": content.questions[:question_count]})
	return content


async def generate_quiz_content(
	client: ChatCompletionClient,
	*,
	subject: str,
	topic: str,
	difficulty: str,
	question_count: int,
	quiz_type: str,
	learning_objectives: Sequence[str],
	analysis: LearningAnalysis,
	learning_style: str,
	time_constraint: Optional[int] = None,
	rng: Optional[random.Random] = None,
) -> GenerationOutcome:
	prompt = build_quiz_prompt(
		subject=subject,
		topic=topic,
		difficulty=difficulty,
		question_count=question_count,
		quiz_type=quiz_type,
		learning_objectives=learning_objectives,
		learning_style=learning_style,
		performance_prediction=analysis.performance_prediction,
		knowledge_gaps=analysis.knowledge_gaps,
		time_constraint=time_constraint,
	)
	try:
		raw = await client.complete(prompt, system_prompt=SYSTEM_PROMPT)
		content = parse_quiz_payload(raw, question_count=question_count)
	except (LLMError, QuizParseError) as err:
		logger.warning("AI quiz generation failed, using fallback: %s", err)
		quiz = generate_fallback_quiz(
			subject,
			topic,
			difficulty,
			question_count,
			quiz_type,
			analysis,
			learning_style=learning_style,
			rng=rng,
		)
		return Fallback(content=QuizContent.model_validate(quiz), reason=str(err))

	if content.difficulty is None:
		content = content.model_copy(update={"difficulty": difficulty})
	return Generated(content=content, model=client.model)

from __future__ import annotations
import logging
import random
from typing import Any, Callable, Dict, Optional

from .analysis import analyze_learning_patterns
from .context import load_learner_context
from .generation import Generated, generate_quiz_content
from .insights import generate_comprehensive_insights, generate_personalization
from .openai_client import ChatCompletionClient
from .schemas import AIInsights, GeneratedQuizOut, Personalization, QuizRequest, QuizResponse
from .store import QuizStore

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], ChatCompletionClient]


class QuizGenerationService:
	"""Runs one quiz generation request end to end.

	load context -> analyze -> resolve lesson -> generate (LLM or fallback)
	-> persist quiz and audit event -> derive insights.
	"""

	def __init__(
		self,
		store: QuizStore,
		client_factory: ClientFactory = ChatCompletionClient,
		rng: Optional[random.Random] = None,
	) -> None:
		self.store = store
		self.client_factory = client_factory
		self.rng = rng

	async def generate(self, request: QuizRequest, actor: Optional[str] = None) -> Dict[str, Any]:
		context = load_learner_context(self.store, request.user_id)
		analysis = analyze_learning_patterns(context, request.previous_performance)
		learning_style = request.user_learning_style or analysis.learning_style
		quiz_type = request.quiz_type.value

		# Resolve the lesson first so a missing path never costs an LLM call
		learning_path = self.store.latest_learning_path(request.user_id, request.subject)
		lesson = self.store.find_lesson(learning_path.id, request.topic)

		client = self.client_factory()
		try:
			outcome = await generate_quiz_content(
				client,
				subject=request.subject,
				topic=request.topic,
				difficulty=request.difficulty_level,
				question_count=request.question_count,
				quiz_type=quiz_type,
				learning_objectives=request.learning_objectives,
				analysis=analysis,
				learning_style=learning_style,
				time_constraint=request.time_constraints,
				rng=self.rng,
			)
		finally:
			await client.aclose()

		content = outcome.content
		questions = [q.model_dump() for q in content.questions]
		metadata: Dict[str, Any] = {
			"generation_source": outcome.source,
			"model": outcome.model if isinstance(outcome, Generated) else None,
			"adaptive_difficulty": content.adaptive_difficulty,
			"personalized_feedback": content.personalized_feedback,
			"learning_style_adapted": learning_style,
			"performance_prediction": analysis.performance_prediction,
		}

		quiz_row = self.store.insert_quiz(
			lesson_id=lesson.id,
			title=content.title,
			description=content.description,
			quiz_type=quiz_type,
			questions=questions,
			time_limit_minutes=content.time_limit_minutes,
			passing_score=content.passing_score,
			difficulty_level=request.difficulty_level,
			metadata=metadata,
		)
		self.store.log_event(
			"quiz_generation",
			f"Generated {quiz_type} quiz for {request.subject} - {request.topic}",
			actor=actor,
			metadata={
				"quiz_id": quiz_row.id,
				"question_count": request.question_count,
				"difficulty_level": request.difficulty_level,
				"learning_style": learning_style,
				"performance_prediction": analysis.performance_prediction,
				"time_constraints": request.time_constraints,
				"generation_source": outcome.source,
			},
		)
		self.store.commit()
		logger.info(
			"Quiz %s generated for user %s via %s (%d questions)",
			quiz_row.id,
			request.user_id,
			outcome.source,
			len(questions),
			extra={"user_id": request.user_id, "quiz_id": quiz_row.id, "generation_source": outcome.source},
		)

		insights = generate_comprehensive_insights(request.difficulty_level, request.learning_objectives, questions)
		personalization = generate_personalization(analysis, learning_style, request.previous_performance)

		response = QuizResponse(
			quiz=GeneratedQuizOut(id=quiz_row.id, metadata=metadata, **content.model_dump()),
			ai_insights=AIInsights(**insights),
			personalization=Personalization(**personalization),
		)
		return response.model_dump(mode="json")

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import UpstreamLookupError
from .store import QuizStore

logger = logging.getLogger(__name__)

RECENT_ATTEMPT_LIMIT = 20
RECENT_PROGRESS_LIMIT = 30


@dataclass
class LearnerContext:
	"""Snapshot of everything the analyzer needs about one learner.

	Attempts and progress events are ordered newest first, knowledge-graph
	entries by descending mastery.
	"""
	user: Dict[str, Any]
	quiz_attempts: List[Dict[str, Any]] = field(default_factory=list)
	knowledge_graph: List[Dict[str, Any]] = field(default_factory=list)
	progress: List[Dict[str, Any]] = field(default_factory=list)
	cognitive_twin: Optional[Dict[str, Any]] = None


def load_learner_context(store: QuizStore, user_id: str) -> LearnerContext:
	user = store.get_user(user_id)
	if user is None:
		raise UpstreamLookupError(f"User '{user_id}' not found", table="users", criteria={"id": user_id})

	attempts = store.recent_quiz_attempts(user_id, limit=RECENT_ATTEMPT_LIMIT)
	graph = store.knowledge_graph(user_id)
	progress = store.recent_progress(user_id, limit=RECENT_PROGRESS_LIMIT)
	twin = store.cognitive_twin(user_id)

	logger.debug(
		"Loaded context for %s: %d attempts, %d graph entries, %d progress events, twin=%s",
		user_id,
		len(attempts),
		len(graph),
		len(progress),
		twin is not None,
	)

	return LearnerContext(
		user={
			"id": user.id,
			"learning_style": user.learning_style,
			"difficulty_preference": user.difficulty_preference,
		},
		quiz_attempts=[
			{"score": a.score, "completed_at": a.completed_at, "quiz_id": a.quiz_id}
			for a in attempts
		],
		knowledge_graph=[
			{"topic": kg.topic, "mastery_level": kg.mastery_level}
			for kg in graph
		],
		progress=[
			{"progress_type": p.progress_type, "percentage": p.percentage, "timestamp": p.timestamp}
			for p in progress
		],
		cognitive_twin=(
			{
				"learning_style_profile": twin.learning_style_profile or {},
				"preferred_session_length": twin.preferred_session_length,
			}
			if twin is not None
			else None
		),
	)

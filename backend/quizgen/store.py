from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from .exceptions import UpstreamLookupError
from .models import (
	CognitiveTwin,
	GeneratedQuiz,
	KnowledgeGraphEntry,
	LearningPath,
	Lesson,
	ProgressEvent,
	QuizAttempt,
	SecurityEvent,
	UserProfile,
)

logger = logging.getLogger(__name__)


class QuizStore:
	"""Query/insert interface over the relational backend used by quiz generation.

	Writes are added to the session but only committed by ``commit()``, so a quiz
	row and its audit event land together or not at all.
	"""

	def __init__(self, db: Session) -> None:
		self.db = db

	# ---- reads ----

	def get_user(self, user_id: str) -> Optional[UserProfile]:
		return self.db.get(UserProfile, user_id)

	def recent_quiz_attempts(self, user_id: str, limit: int = 20) -> List[QuizAttempt]:
		return (
			self.db.query(QuizAttempt)
			.filter(QuizAttempt.user_id == user_id)
			.order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
			.limit(limit)
			.all()
		)

	def knowledge_graph(self, user_id: str) -> List[KnowledgeGraphEntry]:
		return (
			self.db.query(KnowledgeGraphEntry)
			.filter(KnowledgeGraphEntry.user_id == user_id)
			.order_by(KnowledgeGraphEntry.mastery_level.desc())
			.all()
		)

	def recent_progress(self, user_id: str, limit: int = 30) -> List[ProgressEvent]:
		return (
			self.db.query(ProgressEvent)
			.filter(ProgressEvent.user_id == user_id)
			.order_by(ProgressEvent.timestamp.desc(), ProgressEvent.id.desc())
			.limit(limit)
			.all()
		)

	def cognitive_twin(self, user_id: str) -> Optional[CognitiveTwin]:
		return self.db.query(CognitiveTwin).filter(CognitiveTwin.user_id == user_id).first()

	def latest_learning_path(self, user_id: str, subject: str) -> LearningPath:
		row = (
			self.db.query(LearningPath)
			.filter(LearningPath.user_id == user_id, LearningPath.subject == subject)
			.order_by(LearningPath.created_at.desc())
			.first()
		)
		if row is None:
			raise UpstreamLookupError(
				f"No learning path found for user '{user_id}' and subject '{subject}'",
				table="learning_paths",
				criteria={"user_id": user_id, "subject": subject},
			)
		return row

	def find_lesson(self, learning_path_id: str, topic: str) -> Lesson:
		# Case-insensitive substring match on the title
		row = (
			self.db.query(Lesson)
			.filter(Lesson.learning_path_id == learning_path_id, Lesson.title.ilike(f"%{topic}%"))
			.first()
		)
		if row is None:
			raise UpstreamLookupError(
				f"No lesson matching topic '{topic}' in learning path '{learning_path_id}'",
				table="lessons",
				criteria={"learning_path_id": learning_path_id, "topic": topic},
			)
		return row

	def get_quiz(self, quiz_id: str) -> Optional[GeneratedQuiz]:
		return self.db.get(GeneratedQuiz, quiz_id)

	# ---- writes ----

	def insert_quiz(
		self,
		*,
		lesson_id: str,
		title: str,
		description: str,
		quiz_type: str,
		questions: List[Dict[str, Any]],
		time_limit_minutes: int,
		passing_score: int,
		difficulty_level: str,
		metadata: Dict[str, Any],
	) -> GeneratedQuiz:
		row = GeneratedQuiz(
			lesson_id=lesson_id,
			title=title,
			description=description,
			quiz_type=quiz_type,
			questions=questions,
			time_limit_minutes=time_limit_minutes,
			passing_score=passing_score,
			difficulty_level=difficulty_level,
			ai_generated=True,
			quiz_metadata=metadata,
		)
		self.db.add(row)
		# Flush so the generated id is available before commit
		self.db.flush()
		return row

	def log_event(
		self,
		event_type: str,
		description: str,
		*,
		severity: str = "info",
		actor: Optional[str] = None,
		metadata: Optional[Dict[str, Any]] = None,
	) -> SecurityEvent:
		row = SecurityEvent(
			event_type=event_type,
			description=description,
			severity=severity,
			actor=actor,
			event_metadata=metadata or {},
		)
		self.db.add(row)
		return row

	def commit(self) -> None:
		self.db.commit()

	def rollback(self) -> None:
		self.db.rollback()

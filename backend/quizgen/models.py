from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Float, Boolean, Text, JSON, ForeignKey
from .db import Base


def _uuid() -> str:
	return str(uuid.uuid4())


class UserProfile(Base):
	__tablename__ = "users"
	id = Column(String(64), primary_key=True, index=True)
	# visual / auditory / kinesthetic / reading
	learning_style = Column(String(32), nullable=True)
	difficulty_preference = Column(String(32), nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class QuizAttempt(Base):
	__tablename__ = "quiz_attempts"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(String(64), index=True, nullable=False)
	quiz_id = Column(String(64), nullable=True)
	score = Column(Float, nullable=True)  # 0-100
	completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class KnowledgeGraphEntry(Base):
	__tablename__ = "knowledge_graphs"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(String(64), index=True, nullable=False)
	topic = Column(String(256), nullable=False)
	mastery_level = Column(Float, default=0.0, nullable=False)  # 0-100


class ProgressEvent(Base):
	__tablename__ = "progress"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(String(64), index=True, nullable=False)
	progress_type = Column(String(64), nullable=False)
	percentage = Column(Float, default=0.0, nullable=False)
	timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)


class CognitiveTwin(Base):
	__tablename__ = "cognitive_twins"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(String(64), unique=True, index=True, nullable=False)
	learning_style_profile = Column(JSON, nullable=True)
	preferred_session_length = Column(Integer, nullable=True)  # minutes


class LearningPath(Base):
	__tablename__ = "learning_paths"
	id = Column(String(64), primary_key=True, default=_uuid)
	user_id = Column(String(64), index=True, nullable=False)
	subject = Column(String(128), nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Lesson(Base):
	__tablename__ = "lessons"
	id = Column(String(64), primary_key=True, default=_uuid)
	learning_path_id = Column(String(64), ForeignKey("learning_paths.id"), index=True, nullable=False)
	title = Column(String(256), nullable=False)


class GeneratedQuiz(Base):
	__tablename__ = "quizzes"
	id = Column(String(64), primary_key=True, default=_uuid)
	lesson_id = Column(String(64), ForeignKey("lessons.id"), index=True, nullable=False)
	title = Column(String(256), nullable=False)
	description = Column(Text, nullable=True)
	quiz_type = Column(String(32), nullable=False)
	questions = Column(JSON, nullable=False)
	time_limit_minutes = Column(Integer, nullable=False)
	passing_score = Column(Integer, nullable=False)
	difficulty_level = Column(String(32), nullable=False)
	ai_generated = Column(Boolean, default=True, nullable=False)
	# "metadata" is reserved on declarative classes
	quiz_metadata = Column("metadata", JSON, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class SecurityEvent(Base):
	__tablename__ = "security_events"
	id = Column(Integer, primary_key=True, autoincrement=True)
	event_type = Column(String(64), nullable=False)
	description = Column(Text, nullable=False)
	severity = Column(String(16), default="info", nullable=False)
	actor = Column(String(128), nullable=True)
	event_metadata = Column("metadata", JSON, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

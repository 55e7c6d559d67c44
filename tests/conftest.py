import sys
from datetime import datetime, timedelta
from pathlib import Path

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

BACKEND = Path(__file__).resolve().parents[1] / "backend"
if str(BACKEND) not in sys.path:
	sys.path.insert(0, str(BACKEND))

from quizgen.db import init_db
from quizgen.models import (
	CognitiveTwin,
	KnowledgeGraphEntry,
	LearningPath,
	Lesson,
	ProgressEvent,
	QuizAttempt,
	UserProfile,
)
from quizgen.openai_client import ChatCompletionClient

LEARNER_ID = "learner-1"


@pytest.fixture
def engine():
	eng = create_engine(
		"sqlite://",
		connect_args={"check_same_thread": False},
		poolclass=StaticPool,
		future=True,
	)
	init_db(bind=eng)
	yield eng
	eng.dispose()


@pytest.fixture
def session_factory(engine):
	return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture
def db_session(session_factory):
	db = session_factory()
	yield db
	db.close()


def seed_learner(db, user_id=LEARNER_ID, *, with_path=True, with_twin=True):
	"""Learner whose newest 5 scores average 90 and previous 5 average 80.

	avg 85, improving (+5), moderate velocity (10 lessons), one gap (-2) -> 88.
	"""
	now = datetime(2024, 5, 1, 12, 0, 0)
	db.add(UserProfile(id=user_id, learning_style="auditory", difficulty_preference="medium"))
	for i, score in enumerate([90, 92, 88, 91, 89, 80, 82, 78, 81, 79]):
		db.add(QuizAttempt(user_id=user_id, score=score, completed_at=now - timedelta(hours=i)))
	db.add(KnowledgeGraphEntry(user_id=user_id, topic="fractions", mastery_level=85))
	db.add(KnowledgeGraphEntry(user_id=user_id, topic="linear equations", mastery_level=55))
	for i in range(10):
		db.add(ProgressEvent(user_id=user_id, progress_type="lesson_completion", percentage=100, timestamp=now - timedelta(days=i)))
	db.add(ProgressEvent(user_id=user_id, progress_type="lesson_completion", percentage=40, timestamp=now))
	if with_twin:
		db.add(CognitiveTwin(user_id=user_id, learning_style_profile={"visual": 0.4}, preferred_session_length=40))
	if with_path:
		path = LearningPath(user_id=user_id, subject="mathematics", created_at=now)
		db.add(path)
		db.flush()
		db.add(Lesson(learning_path_id=path.id, title="Introduction to Algebra"))
	db.commit()


@pytest.fixture
def seeded(db_session):
	seed_learner(db_session)
	return db_session


def make_client_factory(handler, calls=None):
	"""Build a client factory whose HTTP calls are answered by ``handler``."""

	def factory():
		if calls is not None:
			calls.append(1)
		transport = httpx.MockTransport(handler)
		return ChatCompletionClient(
			api_key="test-key",
			base_url="https://llm.test/v1/chat/completions",
			model="gpt-test",
			http_client=httpx.AsyncClient(transport=transport),
		)

	return factory


def chat_response(content, status_code=200):
	return httpx.Response(
		status_code,
		json={
			"choices": [{"message": {"role": "assistant", "content": content}}],
			"usage": {"prompt_tokens": 10, "completion_tokens": 20},
		},
	)


@pytest.fixture
def api(session_factory):
	from fastapi.testclient import TestClient
	from quizgen.db import get_db
	from quizgen.main import app

	def _get_db():
		db = session_factory()
		try:
			yield db
		finally:
			db.close()

	app.dependency_overrides[get_db] = _get_db
	client = TestClient(app)
	yield client
	app.dependency_overrides.clear()

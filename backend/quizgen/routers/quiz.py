from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from ..auth import Principal, get_request_principal
from ..db import get_db
from ..openai_client import ChatCompletionClient
from ..schemas import QuizRequest, QuizResponse
from ..service import ClientFactory, QuizGenerationService
from ..store import QuizStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["quiz"])


def get_client_factory() -> ClientFactory:
	return ChatCompletionClient


@router.options("/generate", include_in_schema=False)
async def generate_quiz_preflight():
	return Response(status_code=200)


@router.post("/generate", response_model=QuizResponse)
async def generate_quiz(
	req: QuizRequest,
	db: Session = Depends(get_db),
	principal: Optional[Principal] = Depends(get_request_principal),
	client_factory: ClientFactory = Depends(get_client_factory),
):
	store = QuizStore(db)
	service = QuizGenerationService(store, client_factory=client_factory)
	try:
		return await service.generate(req, actor=principal.subject if principal else None)
	except Exception as e:
		store.rollback()
		logger.exception("Quiz generation failed for user %s", req.user_id)
		return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("/{quiz_id}")
def get_quiz(quiz_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
	row = QuizStore(db).get_quiz(quiz_id)
	if row is None:
		raise HTTPException(status_code=404, detail="quiz not found")
	return {
		"id": row.id,
		"lesson_id": row.lesson_id,
		"title": row.title,
		"description": row.description,
		"quiz_type": row.quiz_type,
		"questions": row.questions,
		"time_limit_minutes": row.time_limit_minutes,
		"passing_score": row.passing_score,
		"difficulty_level": row.difficulty_level,
		"ai_generated": row.ai_generated,
		"metadata": row.quiz_metadata or {},
		"created_at": row.created_at.isoformat() if row.created_at else None,
	}

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .db import init_db
from .logging_config import setup_logging
from .settings import settings
from .routers import health, quiz

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


@asynccontextmanager
async def lifespan(app: FastAPI):
	setup_logging(settings.environment, settings.log_level, settings.log_dir)
	init_db()
	logger.info("Quiz service started (model=%s, llm_configured=%s)", settings.openai_model, bool(settings.openai_api_key))
	yield


app = FastAPI(title="Adaptive Quiz Generator API", lifespan=lifespan)
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origins,
	allow_methods=["*"],
	allow_headers=CORS_ALLOW_HEADERS,
)
app.include_router(health.router)
app.include_router(quiz.router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
	# Bad input shares the internal-failure shape
	problems = "; ".join(
		f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
		for err in exc.errors()
	)
	return JSONResponse(status_code=500, content={"error": f"Invalid request: {problems}"})

"""
Logging setup for the quiz service.

Development runs get a coloured one-line console format; production runs log
JSON lines so request/user fields can be searched. File logging with rotation
is enabled when a log directory is configured.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class JSONFormatter(logging.Formatter):
	"""Format records as single-line JSON."""

	def format(self, record: logging.LogRecord) -> str:
		log_data = {
			"timestamp": datetime.now(timezone.utc).isoformat(),
			"level": record.levelname,
			"logger": record.name,
			"message": record.getMessage(),
			"module": record.module,
			"function": record.funcName,
			"line": record.lineno,
		}
		if record.exc_info:
			log_data["exception"] = self.formatException(record.exc_info)
		for key in ("user_id", "quiz_id", "generation_source"):
			if hasattr(record, key):
				log_data[key] = getattr(record, key)
		return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
	"""Coloured console formatter for development."""

	COLORS = {
		"DEBUG": "\033[36m",
		"INFO": "\033[32m",
		"WARNING": "\033[33m",
		"ERROR": "\033[31m",
		"CRITICAL": "\033[35m",
	}
	RESET = "\033[0m"

	def format(self, record: logging.LogRecord) -> str:
		color = self.COLORS.get(record.levelname, self.RESET)
		formatted = (
			f"{color}[{record.levelname}]{self.RESET} "
			f"{record.name}:{record.lineno} - {record.getMessage()}"
		)
		if record.exc_info:
			formatted += f"\n{self.formatException(record.exc_info)}"
		return formatted


def setup_logging(
	environment: str = "development",
	log_level: str = "INFO",
	log_dir: Optional[Path] = None,
) -> None:
	"""
	Configure the root logger.

	Args:
		environment: "development" or "production"
		log_level: Minimum level name (DEBUG, INFO, ...)
		log_dir: Directory for rotating log files (None disables file logging)
	"""
	root_logger = logging.getLogger()
	root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
	root_logger.handlers.clear()

	console_handler = logging.StreamHandler(sys.stdout)
	if environment == "production":
		console_handler.setFormatter(JSONFormatter())
	else:
		console_handler.setFormatter(ConsoleFormatter())
	root_logger.addHandler(console_handler)

	if log_dir:
		log_dir = Path(log_dir)
		log_dir.mkdir(parents=True, exist_ok=True)
		# 10MB per file, keep 5 backups
		file_handler = logging.handlers.RotatingFileHandler(
			log_dir / "quizgen.log",
			maxBytes=10 * 1024 * 1024,
			backupCount=5,
			encoding="utf-8",
		)
		file_handler.setFormatter(JSONFormatter())
		root_logger.addHandler(file_handler)

		error_handler = logging.handlers.RotatingFileHandler(
			log_dir / "quizgen-errors.log",
			maxBytes=10 * 1024 * 1024,
			backupCount=5,
			encoding="utf-8",
		)
		error_handler.setLevel(logging.ERROR)
		error_handler.setFormatter(JSONFormatter())
		root_logger.addHandler(error_handler)

	# httpx logs every request at INFO
	logging.getLogger("httpx").setLevel(logging.WARNING)

	logging.getLogger(__name__).info(
		"Logging configured: environment=%s, level=%s, file_logging=%s",
		environment,
		log_level,
		log_dir is not None,
	)

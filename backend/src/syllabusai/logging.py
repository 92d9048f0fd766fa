"""Structured logging configuration for SyllabusAI.

Provides JSON-formatted logs for production and human-readable
logs for development.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import get_settings


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    # Attributes every LogRecord carries; anything else came in via ``extra``
    _RESERVED = frozenset(
        vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in vars(record).items():
            if key not in self._RESERVED and not key.startswith("_"):
                log_data[key] = value

        if record.funcName:
            log_data["function"] = record.funcName
        if record.lineno:
            log_data["line"] = record.lineno

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable log formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(level: str | None = None) -> None:
    """Configure logging based on settings.

    Args:
        level: Log level overriding settings.log_level
    """
    settings = get_settings()

    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)

    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)

    logger = get_logger(__name__)
    logger.debug(
        "Logging initialized",
        extra={
            "environment": settings.environment,
            "log_level": settings.log_level,
            "log_format": settings.log_format,
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds context to all log messages."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        """Process the logging message and add extra context."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def get_context_logger(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger with additional context.

    Args:
        name: Logger name
        **context: Context fields to add to all log messages

    Returns:
        Logger adapter with context

    Usage:
        logger = get_context_logger(__name__, strategy="REGEX_EXTRACTION_STRATEGY")
        logger.info("Extracting topics")  # Includes strategy
    """
    return LoggerAdapter(get_logger(name), context)


# =========================
# Convenience functions
# =========================


def log_strategy_selected(
    category: str,
    strategy: str,
    confidence: int,
    reason: str,
) -> None:
    """Log which strategy was picked for a category.

    Args:
        category: Extraction category (topics, deadlines, materials)
        strategy: Strategy name
        confidence: Strategy confidence for the text
        reason: Selection rule that fired (priority, confidence, last_resort)
    """
    logger = get_logger("syllabusai.extraction")
    level = logging.DEBUG if reason == "priority" else logging.WARNING
    logger.log(
        level,
        f"Selected {strategy} for {category} ({confidence}% confidence, {reason})",
        extra={
            "category": category,
            "strategy": strategy,
            "confidence": confidence,
            "reason": reason,
            "event": "strategy_selected",
        },
    )


def log_extraction_result(category: str, strategy: str | None, count: int) -> None:
    """Log the outcome of one category extraction."""
    logger = get_logger("syllabusai.extraction")
    logger.info(
        f"Extracted {count} {category} using {strategy or 'no strategy'}",
        extra={
            "category": category,
            "strategy": strategy,
            "count": count,
            "event": "extraction_result",
        },
    )


def log_fallback_used(category: str, primary: str, fallback: str, count: int) -> None:
    """Log that the empty-result fallback chain produced the result."""
    logger = get_logger("syllabusai.extraction")
    logger.info(
        f"{primary} found no {category}; {fallback} supplied {count}",
        extra={
            "category": category,
            "primary": primary,
            "fallback": fallback,
            "count": count,
            "event": "fallback_used",
        },
    )


def log_ai_call(
    provider: str,
    operation: str,
    prompt_chars: int,
    response_chars: int,
    duration_ms: float,
    ok: bool,
) -> None:
    """Log a round trip to the AI provider.

    Args:
        provider: Provider name (gemini, openai, anthropic)
        operation: Logical operation (topics, deadlines, materials, text)
        prompt_chars: Prompt length in characters
        response_chars: Response length in characters
        duration_ms: Round trip duration in milliseconds
        ok: Whether a usable response came back
    """
    logger = get_logger("syllabusai.ai")
    logger.log(
        logging.INFO if ok else logging.WARNING,
        f"AI call {provider}/{operation} {'succeeded' if ok else 'failed'}",
        extra={
            "provider": provider,
            "operation": operation,
            "prompt_chars": prompt_chars,
            "response_chars": response_chars,
            "duration_ms": duration_ms,
            "ok": ok,
            "event": "ai_call",
        },
    )

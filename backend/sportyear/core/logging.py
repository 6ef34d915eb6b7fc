"""
Structured logging configuration.

Every record is stamped with the package name and version so pipeline
logs can be told apart when the analytics run inside a larger service.
Pipeline steps are timed through PipelineDebugLogger.
"""
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

import structlog
from structlog.types import EventDict, Processor

from sportyear import __version__
from sportyear.core.config import settings

SERVICE_NAME = "sportyear"


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp the service name and version onto a log record."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def setup_logging() -> None:
    """Configure structured logging for the application."""

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


# ========================================
# Pipeline Step Logging
# ========================================

@dataclass
class StepLog:
    """Log entry for a single pipeline step."""
    step_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    step: str = ""

    input_count: int = 0
    output_count: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    # Timing
    start_time: float = 0.0
    end_time: float = 0.0
    duration_ms: float = 0.0

    # Status
    success: bool = True
    error_type: Optional[str] = None
    error_message: Optional[str] = None


class PipelineDebugLogger:
    """
    Timing logger for analytics pipeline steps.

    Usage:
        debug_logger = PipelineDebugLogger(logger)
        with debug_logger.track_step("detect_highlights", input_count=len(activities)) as step:
            highlights = detect_race_highlights(activities, config)
            step.set_output(len(highlights))
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger, enabled: Optional[bool] = None):
        self.logger = logger
        self.enabled = settings.ANALYTICS_DEBUG_LOG if enabled is None else enabled

    @contextmanager
    def track_step(self, step: str, input_count: int = 0) -> Generator["StepTracker", None, None]:
        """Context manager for tracking a pipeline step."""
        tracker = StepTracker(
            logger=self.logger,
            enabled=self.enabled,
            step=step,
            input_count=input_count,
        )
        tracker.start()
        try:
            yield tracker
        except Exception as e:
            tracker.set_error(type(e).__name__, str(e))
            raise
        finally:
            tracker.finish()


class StepTracker:
    """Tracker for a single pipeline step."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        enabled: bool,
        step: str,
        input_count: int,
    ):
        self.logger = logger
        self.enabled = enabled
        self.log = StepLog(step=step, input_count=input_count)

    def start(self) -> None:
        """Mark the start of the step."""
        self.log.start_time = time.perf_counter()

        if self.enabled:
            self.logger.debug(
                "Pipeline step started",
                step_id=self.log.step_id,
                step=self.log.step,
                input_count=self.log.input_count,
            )

    def set_output(self, output_count: int, **details: Any) -> None:
        """Record the size of the step's result."""
        self.log.output_count = output_count
        self.log.details.update(details)

    def set_error(self, error_type: str, error_message: str) -> None:
        """Set error information."""
        self.log.success = False
        self.log.error_type = error_type
        self.log.error_message = error_message

    def finish(self) -> None:
        """Mark the end of the step and log summary."""
        self.log.end_time = time.perf_counter()
        self.log.duration_ms = (self.log.end_time - self.log.start_time) * 1000

        if not self.log.success:
            self.logger.error(
                "Pipeline step failed",
                step_id=self.log.step_id,
                step=self.log.step,
                duration_ms=round(self.log.duration_ms, 2),
                error_type=self.log.error_type,
                error_message=self.log.error_message,
            )
        elif self.enabled:
            self.logger.debug(
                "Pipeline step completed",
                step_id=self.log.step_id,
                step=self.log.step,
                duration_ms=round(self.log.duration_ms, 2),
                input_count=self.log.input_count,
                output_count=self.log.output_count,
                **self.log.details,
            )

    def get_summary(self) -> dict:
        """Get a summary of the step for external use."""
        return {
            "step_id": self.log.step_id,
            "step": self.log.step,
            "duration_ms": round(self.log.duration_ms, 2),
            "success": self.log.success,
            "input_count": self.log.input_count,
            "output_count": self.log.output_count,
        }

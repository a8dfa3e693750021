"""Error taxonomy and structured build reporting for feed runs."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

REPORT_FILENAME = ".notesfeed-last-build.json"


class FeedBuildError(Exception):
    """Base class for failures that abort a feed build."""

    stage = "build"


class ContentCompilationError(FeedBuildError):
    """A post could not be read, parsed, or compiled."""

    stage = "load"

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class RenderError(FeedBuildError):
    """A compiled post body could not be rendered or sanitized."""

    stage = "render"

    def __init__(self, message: str, *, slug: str = "") -> None:
        self.slug = slug
        if slug:
            message = f"{slug}: {message}"
        super().__init__(message)


class FeedWriteError(FeedBuildError):
    """The feeds directory or a feed file could not be written."""

    stage = "write"

    def __init__(self, message: str, *, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class BuildFailure(BaseModel):
    """The fatal error that stopped a build."""

    stage: str
    error_type: str
    message: str


class BuildReport(BaseModel):
    """Summary report of a feed build."""

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None
    posts_processed: int = 0
    outputs_written: list[str] = Field(default_factory=list)
    failure: BuildFailure | None = None

    def record_failure(self, exc: Exception) -> None:
        """Record the error that aborted the build."""
        self.failure = BuildFailure(
            stage=getattr(exc, "stage", "build"),
            error_type=type(exc).__name__,
            message=str(exc),
        )

    def finish(self) -> None:
        """Mark the report as finished."""
        self.finished_at = datetime.now()

    @property
    def success(self) -> bool:
        return self.failure is None

    def summary_text(self) -> str:
        """Human-readable summary of the build."""
        duration = ""
        if self.finished_at and self.started_at:
            secs = (self.finished_at - self.started_at).total_seconds()
            duration = f" in {secs:.1f}s"

        status = "completed" if self.success else "failed"
        lines = [f"Feed build {status}{duration}"]
        lines.append(f"Posts: {self.posts_processed}")

        if self.outputs_written:
            lines.append(f"Outputs: {len(self.outputs_written)} files")

        if self.failure is not None:
            lines.append(
                f"  [FATAL] {self.failure.stage}: "
                f"{self.failure.error_type}: {self.failure.message}"
            )

        return "\n".join(lines)


def save_report(report: BuildReport, output_dir: Path) -> Path:
    """Save the build report to disk."""
    report_path = output_dir / REPORT_FILENAME
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    return report_path


def load_report(output_dir: Path) -> BuildReport | None:
    """Load the last build report from disk."""
    report_path = output_dir / REPORT_FILENAME
    if not report_path.exists():
        return None
    try:
        data = json.loads(report_path.read_text(encoding="utf-8"))
        return BuildReport.model_validate(data)
    except (json.JSONDecodeError, ValueError):
        logger.warning("Corrupt report at %s", report_path)
        return None

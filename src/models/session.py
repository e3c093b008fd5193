# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session metrics and session history records."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.datetime import ensure_utc


class Timeframe(str, Enum):
    """Window used when analysing multi-session trends."""

    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class SessionMetrics(BaseModel):
    """Scalar figures describing one session.

    Attributes:
        duration: Session length in seconds.
        words_spoken: Words produced by the learner.
        grammar_accuracy: Grammar accuracy score, 0-100.
        fluency_score: Fluency score, 0-100.
        errors_count: Number of errors flagged.
        improvements_shown: Number of improvements noticed.
        error_categories: Named error categories observed
            (e.g. ``pronunciation``, ``vocabulary``).
        completed: Whether the learner finished the planned session.
    """

    model_config = ConfigDict(frozen=True)

    duration: float = Field(default=0.0, ge=0.0)
    words_spoken: int = Field(default=0, ge=0)
    grammar_accuracy: float = Field(default=0.0, ge=0.0, le=100.0)
    fluency_score: float = Field(default=0.0, ge=0.0, le=100.0)
    errors_count: int = Field(default=0, ge=0)
    improvements_shown: int = Field(default=0, ge=0)
    error_categories: tuple[str, ...] = ()
    completed: bool = True

    @property
    def performance_score(self) -> float:
        """Mean of grammar accuracy and fluency, 0-100."""
        return (self.grammar_accuracy + self.fluency_score) / 2


class SessionRecord(BaseModel):
    """One past session as returned by the learner store."""

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(..., min_length=1)
    topic: str
    persona_id: str | None = None
    start_time: datetime
    metrics: SessionMetrics = Field(default_factory=SessionMetrics)

    @field_validator("start_time")
    @classmethod
    def _normalize_start_time(cls, value: datetime) -> datetime:
        return ensure_utc(value)

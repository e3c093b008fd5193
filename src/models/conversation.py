# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Conversation turn model.

Turns are immutable once created. The decision core only reads them, in
the order the caller supplies.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.datetime import ensure_utc


class Sender(str, Enum):
    """Who produced a conversation turn."""

    USER = "user"
    AGENT = "agent"


class ConversationTurn(BaseModel):
    """A single utterance in a tutoring conversation.

    Attributes:
        id: Turn identifier, unique within the session.
        sender: Learner or tutor.
        content: Transcribed or generated text.
        timestamp: When the turn was produced (normalized to UTC).
        confidence: Speech transcription confidence, when known.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    sender: Sender
    content: str = ""
    timestamp: datetime
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def is_user(self) -> bool:
        return self.sender == Sender.USER

    @property
    def words(self) -> list[str]:
        """Whitespace-delimited words, empty tokens dropped."""
        return self.content.split()

    @property
    def word_count(self) -> int:
        return len(self.words)

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learner data port.

The decision core reads profiles and session history through the
LearnerStore protocol. Durable storage lives outside this package; the
in-memory implementation here backs tests and local runs.
"""

from collections.abc import Iterable
from typing import Protocol

from src.models import SessionRecord, UserProfile


class LearnerNotFoundError(Exception):
    """Raised when a store has no profile for a learner."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"Learner '{user_id}' not found")


class LearnerStore(Protocol):
    """Read interface over learner profiles and session history."""

    def get_user_profile(self, user_id: str) -> UserProfile:
        """Raises LearnerNotFoundError for unknown learners."""
        ...

    def get_session_history(self, user_id: str) -> list[SessionRecord]:
        """Past sessions for the learner, possibly empty."""
        ...


class InMemoryLearnerStore:
    """Dict-backed LearnerStore."""

    def __init__(
        self,
        profiles: Iterable[UserProfile] = (),
        history: dict[str, list[SessionRecord]] | None = None,
    ) -> None:
        self._profiles: dict[str, UserProfile] = {p.user_id: p for p in profiles}
        self._history: dict[str, list[SessionRecord]] = {
            user_id: list(records) for user_id, records in (history or {}).items()
        }

    def get_user_profile(self, user_id: str) -> UserProfile:
        try:
            return self._profiles[user_id]
        except KeyError:
            raise LearnerNotFoundError(user_id) from None

    def get_session_history(self, user_id: str) -> list[SessionRecord]:
        return list(self._history.get(user_id, []))

    def save_user_profile(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile

    def add_session(self, user_id: str, record: SessionRecord) -> None:
        self._history.setdefault(user_id, []).append(record)

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Feature extraction from conversation turns.

Turns a run of conversation turns into EngagementSignals:
- response latency (agent turn followed directly by a learner turn)
- message complexity
- emotional tone
- participation level
- frustration indicators
- transcription confidence

All functions are pure and depend only on the order of the input turns.
"""

from collections.abc import Sequence
from statistics import fmean

from src.core.engagement.constants import (
    FRUSTRATION_PATTERNS,
    NEGATIVE_KEYWORDS,
    POSITIVE_KEYWORDS,
    EmotionalTone,
    FeatureLimits,
    ParticipationLevel,
    ResponseTimeThresholds,
)
from src.core.engagement.context import EngagementSignals
from src.models import ConversationTurn, Sender
from src.utils.datetime import millis_between


def user_turns(turns: Sequence[ConversationTurn]) -> list[ConversationTurn]:
    """Learner turns, in input order."""
    return [turn for turn in turns if turn.sender == Sender.USER]


def response_latencies(turns: Sequence[ConversationTurn]) -> list[float]:
    """Gaps in ms between each agent turn and a learner turn directly after it."""
    return [
        millis_between(previous.timestamp, current.timestamp)
        for previous, current in zip(turns, turns[1:])
        if previous.sender == Sender.AGENT and current.sender == Sender.USER
    ]


def average_response_latency(turns: Sequence[ConversationTurn]) -> float:
    latencies = response_latencies(turns)
    if not latencies:
        return ResponseTimeThresholds.DEFAULT
    return fmean(latencies)


def message_complexity(turn: ConversationTurn) -> float:
    """Complexity of one message in [0, 1].

    Unweighted mean of a word-count score (capped at 20 words), the
    type/token ratio and a mean-word-length score (capped at 6 chars).
    """
    words = turn.words
    if not words:
        return 0.0

    word_count = len(words)
    unique_words = len({word.lower() for word in words})
    average_length = sum(len(word) for word in words) / word_count

    word_count_score = min(word_count / FeatureLimits.WORD_COUNT_CAP, 1.0)
    uniqueness_score = unique_words / word_count
    length_score = min(average_length / FeatureLimits.WORD_LENGTH_CAP, 1.0)
    return (word_count_score + uniqueness_score + length_score) / 3


def average_message_complexity(users: Sequence[ConversationTurn]) -> float:
    if not users:
        return 0.0
    return fmean(message_complexity(turn) for turn in users)


def _keyword_hits(content: str, keywords: Sequence[str]) -> int:
    lowered = content.lower()
    return sum(1 for keyword in keywords if keyword in lowered)


def emotional_tone(users: Sequence[ConversationTurn]) -> EmotionalTone:
    """Compare positive and negative lexicon hits; ties are neutral."""
    positive = sum(_keyword_hits(turn.content, POSITIVE_KEYWORDS) for turn in users)
    negative = sum(_keyword_hits(turn.content, NEGATIVE_KEYWORDS) for turn in users)

    if positive > negative:
        return EmotionalTone.POSITIVE
    if negative > positive:
        return EmotionalTone.NEGATIVE
    return EmotionalTone.NEUTRAL


def participation_level(
    users: Sequence[ConversationTurn],
    session_duration_sec: float,
) -> ParticipationLevel:
    """Classify participation from message rate and mean message length.

    A non-positive session duration yields a rate of zero.
    """
    if session_duration_sec > 0:
        messages_per_minute = len(users) / session_duration_sec * 60
    else:
        messages_per_minute = 0.0
    words_per_message = sum(turn.word_count for turn in users) / max(len(users), 1)

    if (
        messages_per_minute > FeatureLimits.HIGH_MESSAGES_PER_MINUTE
        and words_per_message > FeatureLimits.HIGH_WORDS_PER_MESSAGE
    ):
        return ParticipationLevel.HIGH
    if (
        messages_per_minute > FeatureLimits.MEDIUM_MESSAGES_PER_MINUTE
        and words_per_message > FeatureLimits.MEDIUM_WORDS_PER_MESSAGE
    ):
        return ParticipationLevel.MEDIUM
    return ParticipationLevel.LOW


def frustration_indicators(users: Sequence[ConversationTurn]) -> tuple[str, ...]:
    """Distinct frustration labels in order of first appearance."""
    found: list[str] = []
    for turn in users:
        for label, pattern in FRUSTRATION_PATTERNS.items():
            if label not in found and pattern.search(turn.content):
                found.append(label)
    return tuple(found)


def average_confidence(users: Sequence[ConversationTurn]) -> float:
    scores = [turn.confidence for turn in users if turn.confidence is not None]
    if not scores:
        return FeatureLimits.DEFAULT_CONFIDENCE
    return fmean(scores)


def extract_signals(
    turns: Sequence[ConversationTurn],
    session_duration_sec: float,
) -> EngagementSignals:
    """Extract engagement signals from conversation turns.

    Args:
        turns: Conversation turns in chronological order.
        session_duration_sec: Elapsed session time in seconds.

    Returns:
        EngagementSignals. With no learner turns every signal takes its
        neutral default.
    """
    users = user_turns(turns)
    return EngagementSignals(
        response_latency_ms=average_response_latency(turns),
        message_complexity=average_message_complexity(users),
        emotional_tone=emotional_tone(users),
        participation_level=participation_level(users, session_duration_sec),
        frustration_indicators=frustration_indicators(users),
        confidence_level=average_confidence(users),
    )


def conversation_span_seconds(turns: Sequence[ConversationTurn]) -> float:
    """Seconds between the earliest and latest turn."""
    if len(turns) < 2:
        return 0.0
    timestamps = [turn.timestamp for turn in turns]
    return (max(timestamps) - min(timestamps)).total_seconds()

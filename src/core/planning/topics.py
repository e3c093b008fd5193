# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Topic selection.

Each candidate topic accumulates a weighted score from four sources:

    historical performance   40%  mean session performance on the topic (0-100 -> 0-1)
    time-of-day affinity     30%  flat bonus for topics suited to the time of day
    engagement adjustment    20%  easy topics under low engagement, harder ones under high
    stated preference        10%  flat bonus for the learner's own topics

The best topic not covered in the most recent sessions wins. Without
any session history the level-appropriate static list is used instead.
"""

import random
from collections import defaultdict
from collections.abc import Sequence
from statistics import fmean

from src.core.planning.constants import (
    CHALLENGING_TOPICS,
    EASY_TOPIC_MARKERS,
    FALLBACK_TOPICS,
    TIME_OF_DAY_TOPICS,
    TOPIC_DURATION_MINUTES,
    TopicEngagementThresholds,
    TopicWeights,
)
from src.core.planning.context import TopicRecommendation
from src.models import LanguageLevel, SessionRecord, UserProfile
from src.utils.datetime import TimeOfDay
from src.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RECENT_TOPIC_WINDOW = 5


def estimate_topic_duration(level: LanguageLevel) -> int:
    """Expected minutes on one topic at the given level."""
    return TOPIC_DURATION_MINUTES.get(level, TopicWeights.FALLBACK_DURATION_MINUTES)


def chronological(history: Sequence[SessionRecord]) -> list[SessionRecord]:
    return sorted(history, key=lambda record: record.start_time)


def recent_topics(history: Sequence[SessionRecord], window: int) -> set[str]:
    if window <= 0:
        return set()
    return {record.topic for record in chronological(history)[-window:]}


def topic_performance(history: Sequence[SessionRecord]) -> dict[str, float]:
    """Mean performance score (0-100) per topic."""
    scores: dict[str, list[float]] = defaultdict(list)
    for record in history:
        scores[record.topic].append(record.metrics.performance_score)
    return {topic: fmean(values) for topic, values in scores.items()}


def engagement_adjusted_topics(
    preferred_topics: Sequence[str],
    current_engagement: float,
) -> list[str]:
    """Narrow to easy topics when engagement is low, widen when it is high."""
    if current_engagement < TopicEngagementThresholds.LOW:
        return [
            topic for topic in preferred_topics
            if any(marker in topic.lower() for marker in EASY_TOPIC_MARKERS)
        ]
    if current_engagement > TopicEngagementThresholds.HIGH:
        return [*preferred_topics, *CHALLENGING_TOPICS]
    return list(preferred_topics)


def score_topics(
    profile: UserProfile,
    history: Sequence[SessionRecord],
    current_engagement: float,
    time_of_day: TimeOfDay,
) -> dict[str, float]:
    """Weighted score per candidate topic, in first-seen order."""
    scores: dict[str, float] = {}

    def add(topic: str, amount: float) -> None:
        scores[topic] = scores.get(topic, 0.0) + amount

    for topic, performance in topic_performance(history).items():
        add(topic, TopicWeights.PERFORMANCE * performance / 100.0)
    for topic in TIME_OF_DAY_TOPICS[time_of_day]:
        add(topic, TopicWeights.TIME_OF_DAY)
    for topic in engagement_adjusted_topics(profile.preferred_topics, current_engagement):
        add(topic, TopicWeights.ENGAGEMENT)
    for topic in profile.preferred_topics:
        add(topic, TopicWeights.PREFERENCE)

    return scores


def _preference_rank(profile: UserProfile, topic: str) -> int:
    try:
        return profile.preferred_topics.index(topic)
    except ValueError:
        return len(profile.preferred_topics)


def fallback_topic(
    profile: UserProfile,
    rng: random.Random | None = None,
    exclude: set[str] | None = None,
) -> TopicRecommendation:
    """Pick from the static list for the learner's level.

    A listed topic that matches one of the learner's preferred topics is
    taken first; otherwise the choice is random.
    """
    exclude = exclude or set()
    topics = FALLBACK_TOPICS.get(profile.current_level, FALLBACK_TOPICS[LanguageLevel.INTERMEDIATE])
    candidates = [topic for topic in topics if topic not in exclude] or list(topics)

    preferred = [p.lower() for p in profile.preferred_topics]
    matching = [
        topic for topic in candidates
        if any(p in topic.lower() or topic.lower() in p for p in preferred)
    ]
    if matching:
        topic = matching[0]
    else:
        topic = (rng or random.Random()).choice(candidates)

    return TopicRecommendation(
        topic=topic,
        difficulty=profile.current_level,
        reason=f"Fallback topic selection for {profile.current_level.value} level",
        confidence=TopicWeights.FALLBACK_CONFIDENCE,
        estimated_duration_minutes=TopicWeights.FALLBACK_DURATION_MINUTES,
    )


def select_topic(
    profile: UserProfile,
    session_history: Sequence[SessionRecord],
    current_engagement: float,
    time_of_day: TimeOfDay,
    recent_topic_window: int = DEFAULT_RECENT_TOPIC_WINDOW,
    rng: random.Random | None = None,
) -> TopicRecommendation:
    """Recommend the next conversation topic.

    Args:
        profile: Learner profile.
        session_history: Past sessions, any order.
        current_engagement: Latest engagement score (0-100).
        time_of_day: ``morning``, ``afternoon`` or ``evening``.
        recent_topic_window: Number of most recent sessions whose topics
            are excluded.
        rng: Randomness source for the fallback choice.

    Returns:
        TopicRecommendation at the learner's current level.
    """
    if not session_history:
        recommendation = fallback_topic(profile, rng)
        logger.debug("topic_fallback", reason="no_history", topic=recommendation.topic)
        return recommendation

    excluded = recent_topics(session_history, recent_topic_window)
    scores = score_topics(profile, session_history, current_engagement, time_of_day)
    order = {topic: index for index, topic in enumerate(scores)}
    candidates = [
        (topic, score) for topic, score in scores.items()
        if topic not in excluded and score > 0
    ]

    if not candidates:
        recommendation = fallback_topic(profile, rng, exclude=excluded)
        logger.debug("topic_fallback", reason="no_candidates", topic=recommendation.topic)
        return recommendation

    topic, score = min(
        candidates,
        key=lambda item: (-round(item[1], 9), _preference_rank(profile, item[0]), order[item[0]]),
    )

    logger.debug("topic_selected", topic=topic, score=round(score, 3), excluded=sorted(excluded))
    return TopicRecommendation(
        topic=topic,
        difficulty=profile.current_level,
        reason=f"Selected from performance history, time of day and engagement (score: {score:.2f})",
        confidence=min(TopicWeights.MAX_CONFIDENCE, score),
        estimated_duration_minutes=estimate_topic_duration(profile.current_level),
    )

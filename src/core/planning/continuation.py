# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Templated nudges for stalled conversations.

Phrase variety comes from an injected ``random.Random`` so that callers
(and tests) can seed it.
"""

import random
from collections.abc import Sequence
from datetime import datetime

from src.core.engagement.analyzer import analyze_engagement
from src.core.engagement.context import EngagementAnalysis
from src.core.engagement.patterns import has_frustration_keywords
from src.core.planning.constants import (
    CONTINUATION_TEMPLATE,
    ENGAGEMENT_PROMPTS,
    FRUSTRATION_SUPPORT_PROMPTS,
    SILENCE_PROMPTS,
    PromptType,
    PromptUrgency,
    StallThresholds,
)
from src.core.planning.context import ConversationPrompt
from src.models import ConversationTurn, UserProfile
from src.utils.datetime import ensure_utc, utc_now


def continuation_prompt(current_topic: str) -> ConversationPrompt:
    """Follow-up question about the current topic."""
    return ConversationPrompt(
        type=PromptType.CONTINUATION,
        message=CONTINUATION_TEMPLATE.format(topic=current_topic.lower()),
        context=current_topic,
        urgency=PromptUrgency.LOW,
    )


def silence_prompt(rng: random.Random) -> ConversationPrompt:
    return ConversationPrompt(
        type=PromptType.CONTINUATION,
        message=rng.choice(SILENCE_PROMPTS),
        context="Learner silence detected",
        urgency=PromptUrgency.MEDIUM,
    )


def engagement_prompt(rng: random.Random) -> ConversationPrompt:
    return ConversationPrompt(
        type=PromptType.ENCOURAGEMENT,
        message=rng.choice(ENGAGEMENT_PROMPTS),
        context="Low engagement detected",
        urgency=PromptUrgency.HIGH,
    )


def frustration_support_prompt(rng: random.Random) -> ConversationPrompt:
    return ConversationPrompt(
        type=PromptType.ENCOURAGEMENT,
        message=rng.choice(FRUSTRATION_SUPPORT_PROMPTS),
        context="Learner frustration detected",
        urgency=PromptUrgency.HIGH,
    )


def detect_stall_and_respond(
    turns: Sequence[ConversationTurn],
    last_user_activity: datetime,
    profile: UserProfile | None = None,
    now: datetime | None = None,
    rng: random.Random | None = None,
    analysis: EngagementAnalysis | None = None,
) -> ConversationPrompt | None:
    """Pick a nudge if the conversation has stalled.

    Checked in order: silence longer than 10 seconds, engagement below
    30, frustration language. Returns None when no nudge is needed.

    Args:
        turns: Conversation turns so far.
        last_user_activity: When the learner last spoke.
        profile: Learner profile, passed to the engagement analysis.
        now: Reference time; defaults to the current UTC time.
        rng: Randomness source for phrase choice.
        analysis: Precomputed engagement analysis for ``turns``.
    """
    rng = rng or random.Random()
    reference = ensure_utc(now) if now is not None else utc_now()

    silence = (reference - ensure_utc(last_user_activity)).total_seconds()
    if silence > StallThresholds.SILENCE_SECONDS:
        return silence_prompt(rng)

    analysis = analysis or analyze_engagement(turns, profile)
    if analysis.overall_engagement < StallThresholds.LOW_ENGAGEMENT:
        return engagement_prompt(rng)

    if has_frustration_keywords(turns):
        return frustration_support_prompt(rng)

    return None

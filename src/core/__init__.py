# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for Tutorcore.

This package contains the decision logic and shared configuration:
- config: Application configuration and settings
- engagement: Engagement scoring, disengagement patterns, interventions
- planning: Topic, difficulty, trend and session recommendations
- personas: Tutor persona catalog
- coordination: Multi-persona coordination
- intelligence: Text generation port and model-assisted suggestions
- orchestration: Decision service facade and learner store port
"""

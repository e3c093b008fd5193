"""Tutorcore.

Decision core of a voice-based language tutor: engagement analysis,
disengagement detection, interventions, session planning and tutor
persona coordination.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"

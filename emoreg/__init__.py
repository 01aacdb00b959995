"""Emotional regulation pattern and strategy service.

Analyzes logged emotions for patterns and recommends regulation strategies
based on emotion history, feedback and preferences.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "0.1.0"

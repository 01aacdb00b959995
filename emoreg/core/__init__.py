# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package.

This package contains the core business logic and shared configuration:
- config: Application configuration and settings
- emotional: Pattern analysis and strategy recommendation engines
"""

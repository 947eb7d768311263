################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Pydantic models for chronos configuration."""

# Files in this package can import from `chronos._base._timezones`, but should
# _never_ import `chronos` itself or the factories.

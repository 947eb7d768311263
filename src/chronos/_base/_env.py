################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################

"""Global constants used to access environment variables."""

DEFAULT_TIMEZONE_ENV = "CHRONOS_DEFAULT_TZ"
"""
Used to configure the process-wide default timezone. Read once, on the first call
that needs it.
Example:
    CHRONOS_DEFAULT_TZ=Europe/Warsaw
"""

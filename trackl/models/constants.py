"""Constants for trackl.

This module centralizes the fixed values shared between the HTTP layer and the engine.
"""

from datetime import timedelta


# Namespace cookie
NAMESPACE_COOKIE = "track_namespace"
NAMESPACE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365  # 1 year, in seconds
NAMESPACE_COOKIE_SAMESITE = "strict"
NAMESPACE_TOKEN_BYTES = 8  # hex-encoded to 16 characters

# Progress calculation
DAY = timedelta(hours=24)
PERCENT_DONE_WHEN_NO_WINDOW = 100.0

# Create-task validation messages
ICON_REQUIRED = "icon cannot be empty"
DESCRIPTION_REQUIRED = "description cannot be empty"
ERROR_SEPARATOR = ", "

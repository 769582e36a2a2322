"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
RECENT_ITEMS_LIMIT = 5
MIN_PASSWORD_LENGTH = 6
MIN_SUBJECT_CREDITS = 1
MAX_SUBJECT_CREDITS = 6
SESSION_USER_KEY = "current_user"

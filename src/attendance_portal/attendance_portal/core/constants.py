"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_DAYS = 7
MIN_PASSWORD_LENGTH = 6
NAME_MAX_LENGTH = 100
INSTITUTE_CODE_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
MAX_ROW_ID = 2**31 - 1

PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15

UPLOADS_URL_PREFIX = "/uploads"
DEFAULT_ALLOWED_PHOTO_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp"})

API_VERSION = "1.0.0"

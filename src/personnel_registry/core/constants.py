"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_MAX_PHOTO_BYTES = 5 * 1024 * 1024
DEFAULT_PASSWORD_HASH_METHOD = "scrypt"
PASSWORD_SALT_LENGTH = 16

# Extra room for the multipart envelope around the photo itself.
UPLOAD_ENVELOPE_BYTES = 64 * 1024

SESSION_KEY = "svc_no"
PHOTO_FIELD = "profilePhoto"

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MB = 1024 * 1024

MAX_PROFILE_IMAGE_BYTES = 2 * MB
MAX_BULK_CSV_BYTES = 5 * MB
MAX_CALENDAR_FILE_BYTES = 10 * MB

DEFAULT_SUMMARY_WINDOW_DAYS = 6 * 30

MAX_ANNOUNCEMENT_LENGTH = 5000
DEFAULT_PAGE_SIZE = 10

MIN_CREDITS = 0
MAX_CREDITS = 10

STUDENT_ID_DOMAIN = "@stu.edu"
FACULTY_ID_DOMAIN = "@univ.edu"

DEFAULT_ROLL_YEAR = 1
DEFAULT_ROLL_BRANCH = "GEN"
DEFAULT_CONTACT_NO = 1234567890
FALLBACK_PASSWORD = "password123"

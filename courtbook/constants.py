"""Global constants for the courtbook application."""

# Collection names
COURTS_COLLECTION = "courts"
RESERVATIONS_COLLECTION = "court_reservations"
USERS_COLLECTION = "users"

# Court configuration defaults
DEFAULT_BOOKING_SLOT_MINUTES = 60
DEFAULT_BUFFER_MINUTES = 0
MINUTES_PER_DAY = 24 * 60

# Court types
COURT_TYPE_TENNIS = "tennis"
COURT_TYPE_FOOTBALL = "football"

# Court statuses
COURT_STATUS_ACTIVE = "active"
COURT_STATUS_MAINTENANCE = "maintenance"

# User roles
ROLE_STUDENT = "Student"
ROLE_STAFF = "Staff"
ROLE_PROFESSOR = "Professor"
ROLE_TA = "TA"

# Input formats
DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"

# Firestore document id limits
MAX_DOCUMENT_ID_BYTES = 1500
# Reservation ids append "_YYYY-MM-DD_HHmm" to the court id.
RESERVATION_ID_SUFFIX_BYTES = len("_YYYY-MM-DD_HHmm")
MAX_COURT_ID_BYTES = MAX_DOCUMENT_ID_BYTES - RESERVATION_ID_SUFFIX_BYTES

# Time basis for slot arithmetic
TIME_BASIS_COURT = "court"
TIME_BASIS_UTC = "utc"
TIME_BASES = (TIME_BASIS_COURT, TIME_BASIS_UTC)

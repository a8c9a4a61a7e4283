# =============================================================================
# Constants and Configuration for Shift Request Calendar
# =============================================================================

APP_TITLE = "受付シフト管理"
APP_TIMEZONE = "Asia/Tokyo"             # Deadline comparisons use this clock

# Requests for a month lock at 00:00 on this day of the previous month
DEADLINE_DAY = 26

# Roles
ROLE_STAFF = "staff"
ROLE_ADMIN = "admin"
ROLE_LABELS = {
    ROLE_STAFF: "スタッフ",
    ROLE_ADMIN: "管理者",
}

# Shift time slots
TIME_TYPES = {
    "morning":   {"label": "午前", "start": "08:30", "end": "12:30"},
    "afternoon": {"label": "午後", "start": "13:00", "end": "17:30"},
    "fullday":   {"label": "終日", "start": "08:30", "end": "17:30"},
}
DEFAULT_TIME_TYPE = "morning"

SHIFT_STATUS_REQUESTED = "requested"

# Default reception staff, seeded when the staff collection is empty
DEFAULT_STAFF = [
    {"id": "1", "name": "田中 花子", "color": "#3B82F6"},
    {"id": "2", "name": "佐藤 太郎", "color": "#10B981"},
    {"id": "3", "name": "山田 美咲", "color": "#F59E0B"},
    {"id": "4", "name": "鈴木 一郎", "color": "#EF4444"},
]

# Colors handed out to newly added staff, in order
STAFF_COLOR_PALETTE = [
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444",
    "#8B5CF6", "#EC4899", "#14B8A6", "#F97316",
]
UNKNOWN_STAFF_COLOR = "#6B7280"

# Calendar header, Sunday first
WEEKDAY_LABELS = ["日", "月", "火", "水", "木", "金", "土"]

DAY_KIND_COLORS = {
    "holiday": "#DC2626",
    "sunday": "#DC2626",
    "saturday": "#2563EB",
    "weekday": "#111827",
}

# Persistence collections and the field each one is ordered by
COLLECTION_STAFF = "staff"
COLLECTION_SHIFTS = "shifts"
COLLECTION_CUSTOM_HOLIDAYS = "customHolidays"
COLLECTION_DELETED_SHIFTS = "deletedShifts"
COLLECTION_ORDER = {
    COLLECTION_STAFF: "name",
    COLLECTION_SHIFTS: "date",
    COLLECTION_CUSTOM_HOLIDAYS: "date",
    COLLECTION_DELETED_SHIFTS: "deletedAt",
}

# Local data directory for the JSON backend
DATA_DIR = "data"

BACKEND_MEMORY = "memory"
BACKEND_JSON = "json"
BACKEND_FIRESTORE = "firestore"
DEFAULT_BACKEND = BACKEND_JSON

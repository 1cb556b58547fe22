from .attendance_store import ATTENDANCE_STORAGE_KEY, AttendanceStore, KeyValueBackend
from .edit_session import BulkEditing, EditingRow, EditSession, EditSessionError, Idle

__all__ = [
	"ATTENDANCE_STORAGE_KEY",
	"AttendanceStore",
	"BulkEditing",
	"EditSession",
	"EditSessionError",
	"EditingRow",
	"Idle",
	"KeyValueBackend",
]

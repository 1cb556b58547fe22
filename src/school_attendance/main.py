from __future__ import annotations

from school_attendance.config.log_setup import configure_logging
from school_attendance.config.settings import settings


def main() -> None:
    configure_logging(settings.log_level)

    from school_attendance.ui.app import AttendanceApp

    app = AttendanceApp(settings)
    app.run()


if __name__ == "__main__":
    main()

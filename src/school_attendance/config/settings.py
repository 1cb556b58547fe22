from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[3]
ENV_PATH = BASE_DIR / ".env"
load_dotenv(ENV_PATH)

DOCUMENTS_PATH = Path(os.path.expanduser("~")) / "Documents"
APP_NAME = os.getenv("APP_NAME", "SR Prime School Attendance")


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_data_dir: Path
    attendance_data_file: Path
    export_dir: Path
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        app_data_dir = Path(os.getenv("APP_DATA_DIR", str(DOCUMENTS_PATH / APP_NAME))).expanduser()
        return cls(
            app_name=APP_NAME,
            app_data_dir=app_data_dir,
            attendance_data_file=Path(
                os.getenv("ATTENDANCE_DATA_FILE", str(app_data_dir / "attendance_store.json"))
            ).expanduser(),
            export_dir=Path(os.getenv("EXPORT_DIR", str(app_data_dir / "exports"))).expanduser(),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def ensure_directories(self) -> None:
        self.app_data_dir.mkdir(parents=True, exist_ok=True)
        self.export_dir.mkdir(parents=True, exist_ok=True)

    def __str__(self) -> str:
        return (
            f"Settings(app_name={self.app_name}, "
            f"app_data_dir={self.app_data_dir}, "
            f"attendance_data_file={self.attendance_data_file}, "
            f"export_dir={self.export_dir}, "
            f"log_level={self.log_level})"
        )


settings = Settings.from_env()

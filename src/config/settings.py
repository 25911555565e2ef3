"""Application-wide settings and configuration."""

from pathlib import Path
from typing import Dict, Optional


class Settings:
    """Centralized application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    LOGS_DIR = PROJECT_ROOT / "logs"

    # Ingestion settings
    SUPPORTED_FORMATS: Dict[str, str] = {".csv": "csv", ".json": "json"}
    CSV_DELIMITER = ","
    CSV_ROW_POLICY = "pad"
    FILE_ENCODING = "utf-8-sig"

    # Plot settings
    STRICT_COLOR_RESOLUTION = False

    # Feature flags
    LOAD_SAMPLE_ON_STARTUP = True

    @classmethod
    def ensure_directories(cls) -> None:
        """Ensure all required directories exist."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_format_for_filename(cls, filename: str) -> Optional[str]:
        """Return the declared format for a filename, or None if unsupported."""
        return cls.SUPPORTED_FORMATS.get(Path(filename).suffix.lower())

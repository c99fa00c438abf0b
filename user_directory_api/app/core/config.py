"""
Configuration for the user directory service.

``Settings`` is a plain dataclass whose defaults are read from
environment variables when the module is imported, so the variables
must be set before the application is imported.  Tests that need a
different data file override the ``get_store`` dependency instead.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Directory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional log file.  Empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Backing JSON document holding the whole user collection.  Relative
    # paths are resolved against the working directory of the process,
    # which is where ``run.py`` is normally started from.
    data_file: str = os.getenv("DATA_FILE", "data.json")

    # Origins allowed to call the API from a browser.  ``*`` allows any.
    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))


settings = Settings()

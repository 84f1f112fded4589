"""Runtime settings.

Overridable through environment variables; by default data lives in
``data/`` at the project root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "WARNING"
    warehouse: str = "Main Warehouse"

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            data_dir=Path(os.environ.get("STOCKCORE_DATA_DIR", str(_PROJECT_ROOT / "data"))),
            log_level=os.environ.get("STOCKCORE_LOG_LEVEL", "WARNING").upper(),
            warehouse=os.environ.get("STOCKCORE_WAREHOUSE", "Main Warehouse"),
        )

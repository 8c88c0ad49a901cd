from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DOCUMENT_FILENAME = "finance_data.json"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    database_url: str | None = None
    log_level: str = "INFO"

    @property
    def document_path(self) -> Path:
        return self.data_dir / DOCUMENT_FILENAME


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("HESAB_DATA_DIR")
    if env and env.strip():
        p = Path(env).expanduser()
    else:
        # 2) default: backend/data
        # hesab/settings.py -> hesab/ -> backend/
        p = Path(__file__).resolve().parents[1] / "data"

    p.mkdir(parents=True, exist_ok=True)

    db_url = os.getenv("HESAB_DATABASE_URL")
    log_level = os.getenv("HESAB_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    return Settings(
        data_dir=p,
        database_url=db_url.strip() if db_url and db_url.strip() else None,
        log_level=log_level,
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

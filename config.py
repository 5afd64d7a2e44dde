from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from appdirs import user_data_dir, user_log_dir
from dotenv import load_dotenv

APP_NAME = "crm_clients"


def _default_session_file() -> str:
    return str(Path(user_data_dir(APP_NAME)) / "session.json")


@dataclass
class Settings:
    supabase_url: str = ""
    supabase_anon_key: str = ""
    clients_table: str = "clients"
    request_timeout: float = 10.0
    session_file: str = field(default_factory=_default_session_file)
    log_dir: str = field(default_factory=lambda: user_log_dir(APP_NAME))
    log_level: str = "INFO"
    detailed_logging: bool = False

    @property
    def is_supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def _parse_timeout(raw: str | None, default: float) -> float:
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@lru_cache()
def get_settings() -> Settings:
    dotenv_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path)

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL", "").strip(),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY", "").strip(),
        clients_table=os.getenv("CLIENTS_TABLE", "clients").strip() or "clients",
        request_timeout=_parse_timeout(os.getenv("REQUEST_TIMEOUT"), 10.0),
        session_file=os.getenv("SESSION_FILE") or _default_session_file(),
        log_dir=os.getenv("LOG_DIR") or user_log_dir(APP_NAME),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        detailed_logging=os.getenv("DETAILED_LOGGING", "0").lower() in {"1", "true", "yes", "on"},
    )

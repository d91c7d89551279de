"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


class Settings:
    """
    Runtime configuration read once at import time.

    Every value can be overridden through the environment or config/.env.
    """

    # ── MongoDB ────────────────────────────────────────────────────────────
    MONGODB_URI:      str = os.getenv('MONGODB_URI', '')
    MONGODB_HOST:     str = os.getenv('MONGODB_HOST', 'localhost')
    MONGODB_PORT:     int = _int('MONGODB_PORT', 27017)
    MONGODB_USER:     str = os.getenv('MONGODB_USER', '')
    MONGODB_PASS:     str = os.getenv('MONGODB_PASS', '')
    MONGODB_DATABASE: str = os.getenv('MONGODB_DATABASE', 'gordos_lol_tracker')

    # ── Backend selection ──────────────────────────────────────────────────
    # "mongo" for the real store, "memory" to serve a JSON fixture file.
    DATA_BACKEND:  str           = os.getenv('DATA_BACKEND', 'mongo').strip().lower()
    FIXTURES_PATH: Optional[str] = os.getenv('FIXTURES_PATH') or None

    # ── Timeouts ───────────────────────────────────────────────────────────
    DB_CONNECT_TIMEOUT_MS: int = _int('DB_CONNECT_TIMEOUT_MS', 3000)
    DB_QUERY_TIMEOUT_MS:   int = _int('DB_QUERY_TIMEOUT_MS', 5000)

    # ── Trailing windows (days) ────────────────────────────────────────────
    WINRATE_WINDOW_DAYS:     int = _int('WINRATE_WINDOW_DAYS', 15)
    LEADERBOARD_WINDOW_DAYS: int = _int('LEADERBOARD_WINDOW_DAYS', 14)
    TRACKED_WINDOW_DAYS:     int = _int('TRACKED_WINDOW_DAYS', 7)

    # ── Winrate cache ──────────────────────────────────────────────────────
    WINRATE_CACHE_TTL_S:       int = _int('WINRATE_CACHE_TTL_S', 60)
    WINRATE_CACHE_MAX_ENTRIES: int = _int('WINRATE_CACHE_MAX_ENTRIES', 1024)

    # ── Listings ───────────────────────────────────────────────────────────
    DEFAULT_PAGE_SIZE:      int = _int('DEFAULT_PAGE_SIZE', 10)
    MAX_PAGE_SIZE:          int = _int('MAX_PAGE_SIZE', 50)
    PROFILE_TOP_CHAMPIONS:  int = _int('PROFILE_TOP_CHAMPIONS', 5)
    PROFILE_RECENT_MATCHES: int = _int('PROFILE_RECENT_MATCHES', 5)

    # ── API ────────────────────────────────────────────────────────────────
    API_HOST: str = os.getenv('API_HOST', '0.0.0.0')
    API_PORT: int = _int('API_PORT', 8000)

    # ── Paths & logging ────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    DATA_DIR: Path = BASE_DIR / 'data'
    LOG_DIR:  Path = Path(os.getenv('LOG_DIR', str(DATA_DIR / 'logs')))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @property
    def mongodb_uri(self) -> str:
        """Connection string, built from the individual pieces unless MONGODB_URI is set."""
        if self.MONGODB_URI:
            return self.MONGODB_URI
        if self.MONGODB_USER:
            user = quote_plus(self.MONGODB_USER)
            password = quote_plus(self.MONGODB_PASS)
            return (
                f"mongodb://{user}:{password}@{self.MONGODB_HOST}:{self.MONGODB_PORT}"
                f"/?authSource={self.MONGODB_DATABASE}"
            )
        return f"mongodb://{self.MONGODB_HOST}:{self.MONGODB_PORT}/"

    def validate(self) -> None:
        if self.DATA_BACKEND not in ('mongo', 'memory'):
            raise ValueError(f"DATA_BACKEND must be 'mongo' or 'memory', got {self.DATA_BACKEND!r}")
        if self.DATA_BACKEND == 'memory' and not self.FIXTURES_PATH:
            raise ValueError("FIXTURES_PATH must be set when DATA_BACKEND=memory")
        if self.MAX_PAGE_SIZE < 1:
            raise ValueError("MAX_PAGE_SIZE must be at least 1")


settings = Settings()

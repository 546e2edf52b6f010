import os
from dataclasses import dataclass
from functools import lru_cache


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    try:
        v = os.environ.get(name)
        if v is not None and v.strip():
            return max(minimum, float(v.strip()))
    except ValueError:
        pass
    return default


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    try:
        v = os.environ.get(name)
        if v is not None and v.strip():
            return max(minimum, int(v.strip()))
    except ValueError:
        pass
    return default


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Highlights Feed"
    env: str = "dev"
    log_level: str = "INFO"
    log_file: str = ""  # empty: console only

    scorebat_base_url: str = "https://www.scorebat.com/video-api/v3"
    scorebat_token: str = ""
    remote_timeout_seconds: float = 10.0

    circuit_max_retries: int = 3
    circuit_cooldown_seconds: float = 60.0
    circuit_trip_on_failure: bool = False

    fixtures_dir: str = ""  # empty: bundled demo fixtures
    recommended_limit: int = 10

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            log_file=os.getenv("LOG_FILE", cls.log_file),
            scorebat_base_url=os.getenv("SCOREBAT_BASE_URL", cls.scorebat_base_url),
            scorebat_token=os.getenv("SCOREBAT_API_TOKEN", cls.scorebat_token),
            remote_timeout_seconds=_env_float("REMOTE_TIMEOUT_SECONDS", cls.remote_timeout_seconds, minimum=0.1),
            circuit_max_retries=_env_int("CIRCUIT_MAX_RETRIES", cls.circuit_max_retries),
            circuit_cooldown_seconds=_env_float("CIRCUIT_COOLDOWN_SECONDS", cls.circuit_cooldown_seconds),
            circuit_trip_on_failure=_env_flag("CIRCUIT_TRIP_ON_FAILURE"),
            fixtures_dir=os.getenv("HIGHLIGHTS_FIXTURES_DIR", cls.fixtures_dir),
            recommended_limit=_env_int("RECOMMENDED_LIMIT", cls.recommended_limit, minimum=1),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()

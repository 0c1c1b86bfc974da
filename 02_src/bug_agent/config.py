"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_GITHUB_API_BASE = "https://api.github.com"
DEFAULT_HEARTBEAT_INTERVAL = 30.0


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    """Runtime settings, normally read from the environment."""

    github_token: str = ""
    github_owner: str = ""
    github_repo: str = ""
    github_api_base: str = DEFAULT_GITHUB_API_BASE
    heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL
    api_host: str = "localhost"
    api_port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            github_token=os.getenv("GITHUB_TOKEN", ""),
            github_owner=os.getenv("GITHUB_OWNER", ""),
            github_repo=os.getenv("GITHUB_REPO", ""),
            github_api_base=os.getenv("GITHUB_API_BASE", DEFAULT_GITHUB_API_BASE),
            heartbeat_interval=float(
                os.getenv("HEARTBEAT_INTERVAL", str(DEFAULT_HEARTBEAT_INTERVAL))
            ),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "8000")),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def github_configured(self) -> bool:
        return bool(self.github_token and self.github_owner and self.github_repo)

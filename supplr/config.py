"""Central configuration. Loads the project .env once on import."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from supplr.models.inventory import Settings

# .env at the project root; real environment variables win
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class EngineConfig:
    expiration_warning_days: int = 30
    low_stock_threshold: int = 5
    waste_window_days: int = 30
    demo_email: str = "demo@supplr.net"
    app_url: str = ""
    report_bucket: str = ""
    region_name: str = "us-east-1"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            expiration_warning_days=_env_int("SUPPLR_EXPIRATION_WARNING_DAYS", 30),
            low_stock_threshold=_env_int("SUPPLR_LOW_STOCK_THRESHOLD", 5),
            waste_window_days=_env_int("SUPPLR_WASTE_WINDOW_DAYS", 30),
            demo_email=os.environ.get("SUPPLR_DEMO_EMAIL", "demo@supplr.net"),
            app_url=os.environ.get("SUPPLR_APP_URL", ""),
            report_bucket=os.environ.get("SUPPLR_REPORT_BUCKET", ""),
            region_name=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def default_settings(self) -> Settings:
        """Settings for organizations that never saved their own."""
        return Settings(
            expiration_warning_days=self.expiration_warning_days,
            low_stock_threshold=self.low_stock_threshold,
        )

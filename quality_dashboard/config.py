"""
Application configuration management.
"""
import os
import logging
from dataclasses import dataclass, field
from typing import List


def _default_api_url() -> str:
    return os.getenv("SONAR_API_URL", "https://sonar.ximedes.com/api/dashboard").rstrip("/")


@dataclass
class AppConfig:
    """Application configuration with environment overrides."""

    # Endpoints
    api_url: str = field(default_factory=_default_api_url)
    dashboard_url: str = field(
        default_factory=lambda: os.getenv("SONAR_DASHBOARD_URL", "https://sonar.ximedes.com/dashboard?id=")
    )
    icon_base_url: str = field(default_factory=lambda: os.getenv("ICON_BASE_URL", "app/static"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Cache / network settings
    cache_ttl_seconds: int = field(default_factory=lambda: int(os.getenv("CACHE_TTL_SECONDS", "300")))
    request_timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
    )

    # Business logic defaults
    recency_days: int = field(default_factory=lambda: int(os.getenv("RECENCY_DAYS", "30")))


# Global config instance
config = AppConfig()


def configure_logging(level: str = None):
    """Configure root logging once for the app and scripts."""
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Metrics requested from the service, in column order
METRIC_KEYS: List[str] = [
    "ncloc",
    "duplicated_lines_density",
    "blocker_violations",
    "critical_violations",
    "class_complexity",
    "high_severity_vulns",
    "coverage",
]

# Quality gate glyph files (relative to icon_base_url)
STATUS_ICONS = {
    "OK": "icon_green.png",
    "WARN": "icon_orange.png",
    "ERROR": "icon_red.png",
}

# CSS classes for per-metric gate conditions
METRIC_CLASSES = {
    "WARN": "metric-warn",
    "ERROR": "metric-error",
}

# Formatting constants
FORMAT_INT = "{:,.0f}"
FORMAT_FLOAT = "{:,.1f}"
FORMAT_PERCENT = "{:,.1f}%"
FORMAT_ABSOLUTE_DATE = "{day}-{month}-{year}"

"""
HTTP client for the static-analysis service.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
from requests.exceptions import RequestException

from quality_dashboard.config import config


logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a request fails or returns an unusable payload."""
    pass


class SonarClient:
    """Read-only client for the catalog and projects endpoints."""

    def __init__(self, api_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.api_url = (api_url or config.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.request_timeout_seconds
        self.session = session or requests.Session()
        self.headers = {"Accept": "application/json"}

    def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.api_url}/{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except RequestException as e:
            raise FetchError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {url}: {e}") from e

    def fetch_metrics(self) -> Dict[str, Any]:
        """Metric catalog payload: {key: {name, type}}."""
        data = self._get_json("metrics")
        if not isinstance(data, dict):
            raise FetchError(f"Expected an object from metrics endpoint, got {type(data).__name__}")
        logger.info("Fetched %d metric definitions", len(data))
        return data

    def fetch_projects(self, metric_keys: Sequence[str]) -> List[Dict[str, Any]]:
        """Project records carrying the requested measures."""
        data = self._get_json("projects", params={"metricKeys": ",".join(metric_keys)})
        if not isinstance(data, list):
            raise FetchError(f"Expected a list from projects endpoint, got {type(data).__name__}")
        logger.info("Fetched %d projects", len(data))
        return data

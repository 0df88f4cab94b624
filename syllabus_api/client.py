"""Syllabus API client.

A thin wrapper around the ``GET /v1/syllabuses/{id}`` endpoint using
the ``requests`` library.  Methods return a ``(data, error)`` tuple
instead of raising: on success ``error`` is ``None``; on failure
``data`` is ``None`` and ``error`` is a dictionary with the keys
``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class SyllabusAPI:
    """Client for a running Syllabus Hierarchy API server."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str) -> Tuple[Optional[Any], Optional[Error]]:
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(method=method, url=url, timeout=self.timeout)
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    body = exc.response.json()
                    message = body.get("detail", "") if isinstance(body, dict) else str(body)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def get_syllabus(self, syllabus_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a syllabus and its relations.

        Args:
            syllabus_id: Identifier of the syllabus.
        Returns:
            A tuple ``(syllabus, error)``.  An unknown identifier yields
            an error with ``status_code`` 404.
        """
        return self._request("GET", f"/v1/syllabuses/{quote(str(syllabus_id), safe='')}")

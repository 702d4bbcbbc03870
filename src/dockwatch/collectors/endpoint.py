"""
Generic HTTP endpoint collector.
"""

from __future__ import annotations

import requests

from dockwatch.collectors.base import BaseCollector


class EndpointCollector(BaseCollector):
    """Fetch the body of a fixed URL with a plain GET."""

    name = "endpoint"
    description = "Raw response body of a GET request"

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        super().__init__()
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def collect(self) -> str:
        """
        Issue the GET request and return the response text.

        Raises:
            requests.HTTPError: On a non-2xx status.
            requests.RequestException: On connection, timeout or decode errors.
        """
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

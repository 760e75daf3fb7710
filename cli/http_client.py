from __future__ import annotations

import json
from typing import Any, Dict, Optional

import click
import requests
from requests import Response

from .config import APISettings


class DashboardClient:
    """requests session bound to one dashboard API; failures become ClickExceptions."""

    def __init__(self, settings: APISettings) -> None:
        self.settings = settings
        self.session = requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"
        return headers

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        stream: bool = False,
        expect_json: bool = True,
    ) -> Any:
        return self._request("GET", path, params=params, stream=stream, expect_json=expect_json)

    def post(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("POST", path, params=params)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        stream: bool = False,
        expect_json: bool = True,
    ) -> Any:
        url = f"{self.settings.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                headers=self.headers,
                params=params,
                timeout=self.settings.timeout,
                stream=stream,
            )
        except requests.RequestException as exc:
            raise click.ClickException(f"{method} {url} failed: {exc}") from exc

        if not response.ok:
            self._raise_for_status(response)

        if expect_json:
            try:
                return response.json()
            except json.JSONDecodeError as exc:
                raise click.ClickException("Response was not valid JSON") from exc

        return response

    def _raise_for_status(self, response: Response) -> None:
        try:
            payload = response.json()
            message = payload.get("detail") or payload
        except ValueError:
            message = response.text
        raise click.ClickException(
            f"Request failed with status {response.status_code}: {message}"
        )

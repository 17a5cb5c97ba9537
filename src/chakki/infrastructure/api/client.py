"""Thin HTTP client for the Atta Chakki REST API.

Every request carries the bearer token and a timeout.  Transport errors
and error statuses are translated into domain exceptions here so the
gateways above never see ``requests`` types.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from chakki.domain.exceptions import (
    EntityNotFoundError,
    GatewayError,
    InsufficientStock,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ApiClient:

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers["Accept"] = "application/json"
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def get(self, path: str, params: dict | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: dict, headers: dict | None = None) -> Any:
        return self.request("POST", path, payload=payload, headers=headers)

    def put(self, path: str, payload: dict) -> Any:
        return self.request("PUT", path, payload=payload)

    def patch(self, path: str, payload: dict) -> Any:
        return self.request("PATCH", path, payload=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        payload: dict | None = None,
        headers: dict | None = None,
    ) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise GatewayError(f"Request to {url} failed: {exc}") from exc

        if response.status_code >= 400:
            self._raise_for_status(method, url, response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError(f"Invalid JSON received from {url}") from exc

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _detail(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason or ""
        if isinstance(body, dict):
            detail = body.get("detail")
            if isinstance(detail, list):
                # FastAPI-style validation errors
                return "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)
            if detail:
                return str(detail)
        return str(body)

    def _raise_for_status(self, method: str, url: str, response: requests.Response) -> None:
        status = response.status_code
        detail = self._detail(response)
        logger.warning("%s %s returned %s: %s", method, url, status, detail)

        if status == 404:
            raise EntityNotFoundError(detail or "The requested resource was not found")
        if status in (400, 409, 422):
            if "stock" in detail.lower():
                raise InsufficientStock("", message=detail)
            raise ValidationError(detail or "Request was rejected by the server")
        if status in (401, 403):
            raise GatewayError(f"Not authorised ({status}): {detail}")
        raise GatewayError(f"Server error ({status}): {detail}")

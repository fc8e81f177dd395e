"""
Document Store Gateway - Infrastructure Layer

HTTP client for a CouchDB-compatible document store. Maps error responses
onto the domain error taxonomy; never retries.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from facility_store.domain.entities.errors import (
    STORE_ERRORS_BY_CODE,
    StoreError,
    TransportError,
    UnknownStoreError,
)
from facility_store.domain.gateways.document_store_gateway import (
    IDocumentStoreGateway,
)
from facility_store.shared import get_logger

logger = get_logger(__name__)


def document_path(collection: str, doc_id: str) -> str:
    """Build ``<collection>/<id>`` with the ID percent-encoded."""
    return f"{collection}/{quote(doc_id, safe='')}"


class HttpDocumentStoreGateway(IDocumentStoreGateway):
    """httpx implementation of the document store gateway."""

    def __init__(
        self,
        address: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the gateway.

        Args:
            address: Base URL of the store (e.g. ``http://couch:5984``)
            username: Basic auth user; requests are anonymous unless both
                username and password are set
            password: Basic auth password
            timeout: Deadline in seconds for each request
        """
        self.address = address.rstrip("/")
        self.timeout = timeout
        self._auth: Optional[httpx.BasicAuth] = (
            httpx.BasicAuth(username, password) if username and password else None
        )

    async def execute(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.address}/{path.lstrip('/')}"
        headers = {"accept": "application/json"}
        if body is not None:
            headers["content-type"] = "application/json"

        logger.debug("document_store.request", method=method, url=url, params=params)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, auth=self._auth) as client:
                response = await client.request(
                    method,
                    url,
                    json=body,
                    params=params,
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            logger.error(
                "document_store.timeout",
                method=method,
                url=url,
                timeout=self.timeout,
                exc_info=e,
            )
            raise TransportError(
                f"request to the document store timed out after {self.timeout}s: "
                f"{method} {path}",
                details={"method": method, "path": path},
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "document_store.request_error",
                method=method,
                url=url,
                error=str(e),
                exc_info=e,
            )
            raise TransportError(
                f"failed to communicate with the document store: {str(e)}",
                details={"method": method, "path": path},
            ) from e

        if not response.is_success:
            raise self._to_store_error(method, path, response)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise UnknownStoreError(
                f"unknown response from the document store: {response.text}",
                details={"method": method, "path": path},
            ) from e

    def _to_store_error(
        self, method: str, path: str, response: httpx.Response
    ) -> StoreError:
        details: Dict[str, Any] = {
            "method": method,
            "path": path,
            "status_code": response.status_code,
        }
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict) or "error" not in payload:
            logger.error(
                "document_store.unparseable_error",
                status_code=response.status_code,
                response_text=response.text,
                path=path,
            )
            return UnknownStoreError(
                f"received a non-2xx response ({response.status_code}) for "
                f"{method} {path}. Body: {response.text}",
                details=details,
            )

        code = str(payload.get("error", "")).lower()
        reason = str(payload.get("reason", ""))
        details.update({"error": code, "reason": reason})

        error_cls = STORE_ERRORS_BY_CODE.get(code)
        logger.info(
            "document_store.error_response",
            status_code=response.status_code,
            error=code,
            reason=reason,
            path=path,
        )
        if error_cls is None:
            return UnknownStoreError(
                f"unknown error type: {code}. Message: {reason}", details=details
            )
        return error_cls(f"{code}: {reason}", details=details)

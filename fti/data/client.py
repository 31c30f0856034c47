"""HTTP client for the Fan Token Intel REST API."""

import json
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from ..core.errors import APIError, DecodeError, NetworkError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

USER_AGENT = "fti-cli/1.0"
REQUEST_TIMEOUT = 30.0


def error_message(response: httpx.Response) -> str:
    """Extract a human-readable message from an error response.

    Uses the JSON ``detail`` field when it is a non-empty string, otherwise
    the standard reason phrase for the status code.
    """
    try:
        payload = json.loads(response.content)
    except (ValueError, UnicodeDecodeError):
        payload = None

    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str) and detail:
            return detail

    return httpx.codes.get_reason_phrase(response.status_code) or "Unknown Status"


def decode(raw: bytes, shape: type[T] | Any = None) -> Any:
    """Decode a response body into the expected shape.

    Args:
        raw: Response body
        shape: Model or type to validate against; None returns plain JSON

    Returns:
        Decoded value

    Raises:
        DecodeError: If the body is not valid JSON or does not fit the shape
    """
    try:
        if shape is None:
            return json.loads(raw)
        return TypeAdapter(shape).validate_json(raw)
    except ValidationError as e:
        raise DecodeError(
            f"parsing response: {e.error_count()} validation error(s): "
            f"{e.errors()[0]['msg']}",
            raw=raw,
        ) from e
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(f"parsing response: {e}", raw=raw) from e


class ApiClient:
    """Async client for the Fan Token Intel API.

    The transport step (``get_raw``/``post_raw``) and the decode step
    (``decode``) fail independently, so callers that only pass the body
    through never see a DecodeError.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        session: httpx.AsyncClient | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: API base URL
            api_key: Bearer token; empty for public endpoints
            session: Optional httpx client session
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        body: Any = None,
    ) -> bytes:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(
            "API request",
            method=method,
            path=path,
            params=params or {},
            authenticated=bool(self.api_key),
        )

        try:
            response = await self.session.request(
                method,
                url,
                params=params or None,
                json=body,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("API request timed out", path=path, timeout=self.timeout)
            raise NetworkError(
                f"request failed: timed out after {self.timeout:.0f}s"
            ) from e
        except httpx.RequestError as e:
            logger.warning("API request failed", path=path, error=str(e))
            raise NetworkError(f"request failed: {e}") from e

        raw = response.content
        logger.debug(
            "API response", path=path, status_code=response.status_code, size=len(raw)
        )

        if response.status_code >= 400:
            message = error_message(response)
            logger.info(
                "API error response", path=path, status_code=response.status_code
            )
            raise APIError(response.status_code, message)

        return raw

    async def get_raw(self, path: str, params: dict[str, str] | None = None) -> bytes:
        """Perform a GET request and return the body verbatim."""
        return await self._request("GET", path, params=params)

    async def post_raw(self, path: str, body: Any) -> bytes:
        """Perform a POST request with a JSON body and return the body verbatim."""
        if hasattr(body, "model_dump"):
            body = body.model_dump()
        return await self._request("POST", path, body=body)

    async def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        shape: type[T] | Any = None,
    ) -> tuple[bytes, Any]:
        """GET and decode.

        Returns:
            Tuple of (raw body, decoded value)
        """
        raw = await self.get_raw(path, params)
        return raw, decode(raw, shape)

    async def post(
        self, path: str, body: Any, shape: type[T] | Any = None
    ) -> tuple[bytes, Any]:
        """POST and decode.

        Returns:
            Tuple of (raw body, decoded value)
        """
        raw = await self.post_raw(path, body)
        return raw, decode(raw, shape)

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            await self.session.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

"""Remote catalog API client.

Every operation returns a Result whose error side is a human-readable
message. Callers never see httpx exceptions.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, TypeVar
from urllib.parse import quote

import httpx

from langcat.models import Key, Lang, LangSummary, Tag, TagSummary
from langcat.utils.logging import get_logger
from langcat.utils.result import Err, Ok, Result

logger = get_logger("transport.client")

T = TypeVar("T")


class TransportClient(Protocol):
    """Operations the page machine needs from the catalog API."""

    async def list_langs(self) -> Result[list[LangSummary], str]: ...

    async def list_tags(self) -> Result[list[TagSummary], str]: ...

    async def get_lang(self, key: Key) -> Result[Lang, str]: ...

    async def get_tag(self, tag: Tag) -> Result[list[LangSummary], str]: ...

    async def put_lang(self, lang: Lang) -> Result[None, str]: ...


def _segment(value: str) -> str:
    return quote(value, safe="")


def _decode_summaries(data: Any) -> list[LangSummary]:
    return [LangSummary.from_dict(item) for item in data]


def _decode_tags(data: Any) -> list[TagSummary]:
    return [TagSummary.from_dict(item) for item in data]


def error_message(response: httpx.Response) -> str:
    """
    Extract a displayable message from a failed response.

    Uses the body's "message" or "error" field when the server sent JSON,
    otherwise falls back to the status line.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for name in ("message", "error"):
            value = body.get(name)
            if isinstance(value, str) and value:
                return value

    return f"HTTP {response.status_code} {response.reason_phrase}".rstrip()


class HttpTransport:
    """
    TransportClient backed by httpx.AsyncClient.

    Endpoints are resolved relative to base_url:
    GET langs, GET tags, GET langs/{key}, GET tags/{tag}, PUT langs/{key}.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API root (e.g., "http://localhost:8080/api")
            timeout: Per-request timeout in seconds
            headers: Extra headers sent with every request
            transport: Optional httpx transport (used to stub the network)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers or {},
            transport=transport,
        )

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def list_langs(self) -> Result[list[LangSummary], str]:
        return await self._request("GET", "/langs", _decode_summaries)

    async def list_tags(self) -> Result[list[TagSummary], str]:
        return await self._request("GET", "/tags", _decode_tags)

    async def get_lang(self, key: Key) -> Result[Lang, str]:
        return await self._request("GET", f"/langs/{_segment(key)}", Lang.from_dict)

    async def get_tag(self, tag: Tag) -> Result[list[LangSummary], str]:
        return await self._request("GET", f"/tags/{_segment(tag)}", _decode_summaries)

    async def put_lang(self, lang: Lang) -> Result[None, str]:
        return await self._request(
            "PUT",
            f"/langs/{_segment(lang.key)}",
            None,
            payload=lang.to_dict(),
        )

    async def _request(
        self,
        method: str,
        path: str,
        decode: Optional[Callable[[Any], T]],
        payload: Optional[dict] = None,
    ) -> Result[T, str]:
        """
        Perform one request and convert the outcome to a Result.

        Args:
            method: HTTP method
            path: Path relative to base_url
            decode: Converts the JSON body to the success value (None to ignore the body)
            payload: Optional JSON request body

        Returns:
            Ok with the decoded value or Err with a display message
        """
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            message = str(e) or type(e).__name__
            logger.warning(
                "transport_request_failed",
                method=method,
                path=path,
                error=message,
            )
            return Err(message)

        if response.is_error:
            message = error_message(response)
            logger.warning(
                "transport_request_failed",
                method=method,
                path=path,
                status=response.status_code,
                error=message,
            )
            return Err(message)

        logger.debug(
            "transport_request_completed",
            method=method,
            path=path,
            status=response.status_code,
        )

        if decode is None:
            return Ok(None)

        try:
            return Ok(decode(response.json()))
        except (ValueError, KeyError, TypeError) as e:
            message = f"invalid response: {e}"
            logger.warning(
                "transport_decode_failed",
                method=method,
                path=path,
                error=message,
            )
            return Err(message)

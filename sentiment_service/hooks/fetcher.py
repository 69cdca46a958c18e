"""Outbound GET requests to hook endpoints."""

from __future__ import annotations

import logging

import httpx

from sentiment_service.config import URL_TOKEN_RE
from sentiment_service.hooks.errors import BodyReadError, TransportError, URLFormatError
from sentiment_service.hooks.models import HookDescriptor, RawHookResponse

logger = logging.getLogger(__name__)


def build_hook_url(descriptor: HookDescriptor, record_id: str) -> str:
    """Substitute ``record_id`` into the descriptor's URL slot and validate the result.

    The record id is inserted verbatim, without escaping. ``%%`` in the
    template becomes a literal ``%``.

    Raises:
        URLFormatError: If the result is not an absolute http(s) URL.
    """
    # A function replacement keeps backslashes in the record id literal.
    url = URL_TOKEN_RE.sub(
        lambda match: "%" if match.group(1) == "%" else record_id, descriptor.url_template
    )
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise URLFormatError(descriptor.hook_id, url, str(exc)) from exc

    if parsed.scheme not in ("http", "https"):
        raise URLFormatError(descriptor.hook_id, url, f"unsupported scheme {parsed.scheme!r}")
    if not parsed.host:
        raise URLFormatError(descriptor.hook_id, url, "missing host")
    return url


class HookFetcher:
    """Performs exactly one GET per fetch: no retries, no caching.

    Args:
        timeout: Seconds before connect/read/write/pool timeouts fire.
        client: Optional pre-built httpx.Client (tests pass one with a
            MockTransport). The fetcher closes it on ``close()`` either way.
    """

    def __init__(self, timeout: float = 30.0, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch(self, descriptor: HookDescriptor, record_id: str) -> RawHookResponse:
        """Fetch the raw body the hook returns for ``record_id``.

        Raises:
            URLFormatError: The templated URL is invalid.
            TransportError: The request could not be sent or timed out.
            BodyReadError: The response body could not be read to the end.
        """
        url = build_hook_url(descriptor, record_id)

        try:
            request = self._client.build_request("GET", url, headers=descriptor.header_items())
            response = self._client.send(request, stream=True)
        except httpx.RequestError as exc:
            raise TransportError(descriptor.hook_id, url, str(exc) or type(exc).__name__) from exc

        try:
            body = response.read()
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise BodyReadError(descriptor.hook_id, url, str(exc) or type(exc).__name__) from exc
        finally:
            response.close()

        if response.is_error:
            logger.warning(
                "Hook %s returned HTTP %d for %s; interpreting body anyway",
                descriptor.hook_id,
                response.status_code,
                url,
            )

        return RawHookResponse(
            body=body,
            content_length=len(body),
            status_code=response.status_code,
            url=url,
        )

    def close(self) -> None:
        self._client.close()

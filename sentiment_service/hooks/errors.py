"""Exceptions raised while resolving, fetching and interpreting hook responses."""

from __future__ import annotations

# Bytes of the hook body quoted in MalformedBodyError messages.
EXCERPT_LENGTH = 200


class HookError(Exception):
    """Base exception for all hook task failures."""

    pass


class HookNotFound(HookError):
    """Raised when the requested (or default) hook id is not configured."""

    def __init__(self, hook_id: str) -> None:
        self.hook_id = hook_id
        if hook_id:
            super().__init__(f"Hook not found: {hook_id}")
        else:
            super().__init__("No hook id given and no default hook is configured")


class URLFormatError(HookError):
    """Raised when a hook URL is not a valid absolute URL after substitution."""

    def __init__(self, hook_id: str, url: str, reason: str) -> None:
        self.hook_id = hook_id
        self.url = url
        super().__init__(f"Invalid URL for hook {hook_id!r}: {url!r} ({reason})")


class TransportError(HookError):
    """Raised when the outbound hook request could not be completed."""

    def __init__(self, hook_id: str, url: str, reason: str) -> None:
        self.hook_id = hook_id
        self.url = url
        super().__init__(f"Request to hook {hook_id!r} at {url} failed: {reason}")


class BodyReadError(HookError):
    """Raised when the hook response body could not be fully read."""

    def __init__(self, hook_id: str, url: str, reason: str) -> None:
        self.hook_id = hook_id
        self.url = url
        super().__init__(f"Could not read response body from hook {hook_id!r}: {reason}")


class MalformedBodyError(HookError):
    """Raised when the hook body is not valid JSON or not valid segment data."""

    def __init__(self, hook_id: str, body: bytes, reason: str) -> None:
        self.hook_id = hook_id
        self.excerpt = body[:EXCERPT_LENGTH].decode("utf-8", errors="replace")
        super().__init__(
            f"Malformed response body from hook {hook_id!r}: {reason}. Body: {self.excerpt!r}"
        )


class MissingKeyError(HookError):
    """Raised when the configured key is absent from the hook's JSON object."""

    def __init__(self, hook_id: str, key: str) -> None:
        self.hook_id = hook_id
        self.key = key
        super().__init__(f"Key {key!r} missing from response of hook {hook_id!r}")


class TypeMismatchError(HookError):
    """Raised when a JSON value has a different type than the hook shape implies."""

    def __init__(self, hook_id: str, key: str, expected: str, actual: str) -> None:
        self.hook_id = hook_id
        self.key = key
        self.expected = expected
        self.actual = actual
        where = f"key {key!r}" if key else "top-level value"
        super().__init__(
            f"Expected {expected} at {where} of hook {hook_id!r} response, got {actual}"
        )

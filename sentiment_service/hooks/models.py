"""Data models for hook resolution and time-series assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from sentiment_service.scoring.models import Analysis


class ResponseShape(StrEnum):
    """How a hook's response body is interpreted, derived from ``key``/``timed``."""

    RAW_TEXT = "raw_text"
    KEYED_TEXT = "keyed_text"
    KEYED_SERIES = "keyed_series"
    SERIES = "series"


@dataclass(frozen=True)
class HookDescriptor:
    """Immutable description of one configured hook endpoint.

    ``headers`` is a tuple of ``(name, values)`` pairs so a single header may
    be sent more than once, in configured order.
    """

    hook_id: str
    url_template: str
    headers: tuple[tuple[str, tuple[str, ...]], ...] = ()
    key: str = ""
    timed: bool = False

    def header_items(self) -> list[tuple[str, str]]:
        """Flatten headers into the ``(name, value)`` list httpx accepts."""
        return [(name, value) for name, values in self.headers for value in values]


@dataclass(frozen=True)
class TaskRequest:
    """A caller's request to score the text a hook returns for ``record_id``."""

    record_id: str
    hook_id: str | None = None


@dataclass(frozen=True)
class Segment:
    """One time-stamped unit of text; ``score`` is set once it has been scored."""

    start: float
    end: float
    text: str
    score: int | float | None = None


@dataclass(frozen=True)
class RawHookResponse:
    """Body and metadata of one hook fetch."""

    body: bytes
    content_length: int
    status_code: int = 200
    url: str = ""


@dataclass
class SeriesResult:
    """Whole-document analysis plus the independently scored segments."""

    metadata: Analysis
    series: list[Segment] = field(default_factory=list)


TaskResult = Analysis | SeriesResult

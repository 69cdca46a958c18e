"""Interpretation of hook response bodies into text or time-stamped segments.

A hook's ``key`` and ``timed`` flags select one of four body shapes:

====== ======= ==============================================================
key    timed   body
====== ======= ==============================================================
absent false   raw text, used verbatim
set    false   ``{"<key>": "text"}``
set    true    ``{"<key>": [{"start": s, "end": s, "text": "..."}, ...]}``
absent true    ``[{"start": s, "end": s, "text": "..."}, ...]``
====== ======= ==============================================================

Keyed series timestamps are multiplied by 1000 on the way in; bare series
timestamps are kept as given. Both behaviours are relied on by existing
consumers and must not be unified.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from sentiment_service.hooks.errors import MalformedBodyError, MissingKeyError, TypeMismatchError
from sentiment_service.hooks.models import HookDescriptor, RawHookResponse, ResponseShape, Segment
from sentiment_service.hooks.series import reduce_series

KEYED_SERIES_SCALE = 1000.0


class SegmentPayload(BaseModel):
    """One ``{start, end, text}`` triple as sent by a timed hook."""

    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    start: float
    end: float
    text: str


_SERIES_ADAPTER: TypeAdapter[list[SegmentPayload]] = TypeAdapter(list[SegmentPayload])


def classify_shape(descriptor: HookDescriptor) -> ResponseShape:
    """Return the body shape implied by the descriptor's ``key``/``timed`` flags."""
    if descriptor.key:
        return ResponseShape.KEYED_SERIES if descriptor.timed else ResponseShape.KEYED_TEXT
    return ResponseShape.SERIES if descriptor.timed else ResponseShape.RAW_TEXT


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _load_json(descriptor: HookDescriptor, body: bytes) -> Any:
    # ValueError covers JSONDecodeError, UnicodeDecodeError and NaN/Infinity.
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise MalformedBodyError(descriptor.hook_id, body, str(exc)) from exc


def _keyed_value(descriptor: HookDescriptor, body: bytes) -> Any:
    data = _load_json(descriptor, body)
    if not isinstance(data, dict):
        raise TypeMismatchError(descriptor.hook_id, "", "object", _json_type(data))
    if descriptor.key not in data:
        raise MissingKeyError(descriptor.hook_id, descriptor.key)
    return data[descriptor.key]


def _decode_series(
    descriptor: HookDescriptor, value: Any, body: bytes, scale: float
) -> list[Segment]:
    if not isinstance(value, list):
        raise TypeMismatchError(descriptor.hook_id, descriptor.key, "array", _json_type(value))
    try:
        payloads = _SERIES_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise MalformedBodyError(
            descriptor.hook_id, body, f"invalid segment data ({exc.error_count()} errors)"
        ) from exc
    return [Segment(start=p.start * scale, end=p.end * scale, text=p.text) for p in payloads]


def interpret(
    descriptor: HookDescriptor, raw: RawHookResponse
) -> tuple[list[Segment] | None, str]:
    """Decode a hook body according to the descriptor's shape.

    Args:
        descriptor: The hook whose ``key``/``timed`` flags select the shape.
        raw: The fetched body.

    Returns:
        ``(segments, text)``. ``segments`` is None for the untimed shapes; for
        timed shapes ``text`` is the reduced series text.

    Raises:
        MalformedBodyError: The body is not valid JSON, or segment triples
            do not match ``{start: number, end: number, text: string}``.
        MissingKeyError: ``key`` is configured but absent from the object.
        TypeMismatchError: A JSON value has the wrong type for the shape.
    """
    shape = classify_shape(descriptor)

    if shape is ResponseShape.RAW_TEXT:
        return None, raw.body.decode("utf-8", errors="replace")

    if shape is ResponseShape.KEYED_TEXT:
        value = _keyed_value(descriptor, raw.body)
        if not isinstance(value, str):
            raise TypeMismatchError(descriptor.hook_id, descriptor.key, "string", _json_type(value))
        return None, value

    if shape is ResponseShape.KEYED_SERIES:
        value = _keyed_value(descriptor, raw.body)
        segments = _decode_series(descriptor, value, raw.body, KEYED_SERIES_SCALE)
    else:
        value = _load_json(descriptor, raw.body)
        segments = _decode_series(descriptor, value, raw.body, 1.0)

    return segments, reduce_series(segments)

"""Conversion between the display and execution result shapes.

Incoming records are loosely typed (JSON from the front-end, dicts from the
attack runner, or result objects). Missing or malformed fields are
defaulted instead of rejected:

  id         -> number, 0 when empty or not numeric
  payload    -> always a list of strings
  timestamp  -> ISO text on IntruderResult, epoch ms on AttackResult
"""

import math
import time
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Union

import httpx

from intruder.core.models import AttackResult, IntruderResult, Number, RawResult


DEPRECATED_SET_TYPES = {"brute-forcer": "brute-force"}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MS = timedelta(milliseconds=1)


def _get(raw: Any, *names: str) -> Any:
    for name in names:
        if isinstance(raw, Mapping):
            if name in raw:
                return raw[name]
        elif hasattr(raw, name):
            return getattr(raw, name)
    return None


def _falsy(value: Any) -> bool:
    # NaN counts as empty, like the other falsy values
    return not value or (isinstance(value, float) and math.isnan(value))


def _to_number(value: Any) -> Number:
    if _falsy(value):
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    text = str(value).strip()
    if "_" in text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _parse_iso_ms(text: str) -> Number:
    """Epoch milliseconds of an ISO 8601 string, NaN when it does not parse."""
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        return math.nan
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // _MS


def _format_iso(epoch_ms: Number) -> str:
    # timedelta() rejects NaN with ValueError; callers wrap with the boundary
    moment = _EPOCH + timedelta(milliseconds=epoch_ms)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def format_result(raw: Union[RawResult, Any]) -> IntruderResult:
    """Coerce a loosely-typed record into an IntruderResult."""
    payload = _get(raw, "payload")
    if isinstance(payload, (list, tuple)):
        payload = list(payload)
    else:
        payload = [""] if _falsy(payload) else [str(payload)]

    timestamp = _get(raw, "timestamp")

    return IntruderResult(
        id=_to_number(_get(raw, "id")),
        payload=payload,
        status=_get(raw, "status"),
        length=_get(raw, "length"),
        time_ms=_get(raw, "time_ms", "timeMs"),
        timestamp="" if _falsy(timestamp) else str(timestamp),
        request=_get(raw, "request"),
        response=_get(raw, "response"),
        color=_get(raw, "color"),
        selected=_get(raw, "selected"),
    )


def to_attack_result(result: IntruderResult) -> AttackResult:
    # Unparseable timestamp text becomes NaN rather than the current time.
    if isinstance(result.timestamp, str):
        timestamp = _parse_iso_ms(result.timestamp)
    else:
        timestamp = _now_ms()

    return AttackResult(
        id=str(result.id),
        payload=result.payload,
        status=result.status,
        length=result.length,
        time_ms=result.time_ms,
        timestamp=timestamp,
        request=result.request,
        response=result.response,
    )


def to_intruder_result(result: AttackResult) -> IntruderResult:
    timestamp = result.timestamp
    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        iso = _format_iso(timestamp)
    else:
        iso = _format_iso(_now_ms())

    return IntruderResult(
        id=_to_number(result.id),
        payload=result.payload,
        status=result.status,
        length=result.length,
        time_ms=result.time_ms,
        timestamp=iso,
        request=result.request,
        response=result.response,
    )


def normalize_payload_sets(payload_sets: Any) -> List[Any]:
    """Shallow-copy payload set descriptors, renaming deprecated type tags."""
    if not payload_sets or not isinstance(payload_sets, (list, tuple)):
        return []

    normalized = []
    for payload_set in payload_sets:
        if isinstance(payload_set, Mapping):
            payload_set = dict(payload_set)
            kind = payload_set.get("type")
            if kind in DEPRECATED_SET_TYPES:
                payload_set["type"] = DEPRECATED_SET_TYPES[kind]
        normalized.append(payload_set)
    return normalized


def result_from_response(
    response: httpx.Response,
    payload: List[str],
    result_id: Any,
    time_ms: Optional[Number] = None,
) -> AttackResult:
    """Build an AttackResult from a response the caller already received."""
    if time_ms is None:
        try:
            time_ms = int(response.elapsed.total_seconds() * 1000)
        except RuntimeError:
            # elapsed is only set once the response has been read and closed
            time_ms = 0

    try:
        request = response.request
        request_line = f"{request.method} {request.url}"
    except RuntimeError:
        request_line = None

    return AttackResult(
        id=str(result_id),
        payload=list(payload),
        status=response.status_code,
        length=len(response.content),
        time_ms=time_ms,
        timestamp=_now_ms(),
        request=request_line,
        response=response.text,
    )

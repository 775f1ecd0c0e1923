from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation
import math
import re
from typing import Any, Mapping

CUSTOM_FIELD_SUFFIX = "__c"
VALUE_DECIMALS = 3

_SEPARATORS = re.compile(r"[_\-.\s]+")
_US_FORMATS = ("%m/%d/%Y %I:%M %p", "%m/%d/%Y %H:%M", "%m/%d/%Y")


def parse_date_like(raw: Any) -> dt.datetime | None:
    """Interpret ``raw`` as a calendar value, or return None when it is not one.

    Only strings and date objects are date-like; numbers are left alone because
    category axes hand out plain tick indices.
    """

    if isinstance(raw, dt.datetime):
        return raw
    if isinstance(raw, dt.date):
        return dt.datetime(raw.year, raw.month, raw.day)
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _US_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(raw: Any) -> str:
    parsed = parse_date_like(raw)
    if parsed is None:
        return _passthrough(raw)
    return f"{parsed.month:02d}/{parsed.day:02d}/{parsed.year:04d}"


def format_datetime(raw: Any) -> str:
    parsed = parse_date_like(raw)
    if parsed is None:
        return _passthrough(raw)
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{parsed.month:02d}/{parsed.day:02d}/{parsed.year:04d} {hour}:{parsed.minute:02d} {meridiem}"


def humanize(identifier: str | None) -> str:
    """Turn a field identifier like ``Deal_Stage__c`` into ``Deal Stage``."""

    if not identifier:
        return ""
    text = str(identifier)
    if text.endswith(CUSTOM_FIELD_SUFFIX):
        text = text[: -len(CUSTOM_FIELD_SUFFIX)]
    words = [w for w in _SEPARATORS.split(text) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def display_label(field: str, labels: Mapping[str, str] | None = None) -> str:
    if labels:
        label = labels.get(field)
        if label:
            return str(label)
    return humanize(field) or field


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    try:
        q = Decimal(str(value)).quantize(Decimal("1").scaleb(-VALUE_DECIMALS))
    except InvalidOperation:
        return str(value)
    out = format(q, ",f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _passthrough(raw: Any) -> str:
    if raw is None:
        return ""
    return raw if isinstance(raw, str) else str(raw)

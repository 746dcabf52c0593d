from __future__ import annotations

import json
import re
from typing import Any

_CASE_BOUNDARY = re.compile(r'([a-z])([A-Z])')


def humanize_key(key: str) -> str:
    """Turn a compact key like 'firstName' or 'doc_type' into a label.

    'firstName' -> 'First Name', 'doc_type' -> 'Doc type', 'userID' -> 'User ID'.
    """
    if not isinstance(key, str):
        key = str(key)
    label = _CASE_BOUNDARY.sub(r'\1 \2', key)
    label = label.replace('_', ' ')
    return label[:1].upper() + label[1:]


def flatten_value(value: Any) -> str:
    """Render any JSON value as a single table cell.

    Dicts and lists become compact JSON; None becomes 'null' and booleans
    'true'/'false' so cells read the same as the source document.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    if value is None or isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return str(value)

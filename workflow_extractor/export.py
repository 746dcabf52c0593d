from __future__ import annotations

import csv
import io
import json
import zipfile
from typing import Any, Dict, List, Mapping, Sequence

# Fixed timestamp so identical tables always produce identical archives.
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def serialize_rows(rows: Sequence[Mapping[str, Any]], headers: Sequence[str]) -> str:
    """Render rows as CSV text with the given column order.

    Returns '' for no rows. Cells missing from a row are left empty and
    keys not listed in headers are ignored.
    """
    if not rows:
        return ''

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(headers), restval='', extrasaction='ignore')
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def build_csv_archive(tables: Dict[str, Any], name: str) -> bytes:
    """Zip one `{name}_{table}.csv` per (rows, headers) table."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for table_name, (rows, headers) in tables.items():
            info = zipfile.ZipInfo(f"{name}_{table_name}.csv", date_time=_ZIP_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            archive.writestr(info, serialize_rows(rows, headers).encode('utf-8'))
    return buffer.getvalue()


def dump_payload(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def table_preview(rows: List[Dict[str, Any]], headers: Sequence[str], limit: int = 50) -> List[List[Any]]:
    """First `limit` rows as lists, aligned with headers."""
    return [[row.get(h, '') for h in headers] for row in rows[:max(0, int(limit))]]

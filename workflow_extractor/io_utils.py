from __future__ import annotations

import json
import os
from typing import Any, Optional

from .config import DEFAULTS, ExtractorConfig
from .errors import DocumentParseError


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not valid JSON.
    raise DocumentParseError(f"Invalid JSON: unsupported literal {name}")


def parse_json_text(content, config: Optional[ExtractorConfig] = None) -> Any:
    """Parse JSON text or UTF-8 bytes into a document."""
    config = config or DEFAULTS
    if isinstance(content, bytes):
        if len(content) > config.max_upload_bytes:
            raise DocumentParseError(f"File is larger than {config.max_upload_bytes} bytes.")
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError as exc:
            raise DocumentParseError(f"File is not UTF-8 text: {exc}") from exc
    elif len(content) > config.max_upload_bytes:
        raise DocumentParseError(f"File is larger than {config.max_upload_bytes} bytes.")

    try:
        return json.loads(content.lstrip('\ufeff'), parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise DocumentParseError("Invalid JSON: document is nested too deeply to parse.") from exc


def read_json_content(file_obj, config: Optional[ExtractorConfig] = None) -> Any:
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise DocumentParseError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return parse_json_text(file_obj.read(), config)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    try:
        with open(path, 'rb') as f:
            content = f.read()
    except OSError as exc:
        raise DocumentParseError(f"Could not read file: {exc}") from exc
    return parse_json_text(content, config)


def workflow_name(file_obj, default: str = 'workflow') -> str:
    """Base name of the uploaded file without its extension."""
    if file_obj is None:
        return default
    path = file_obj if isinstance(file_obj, (str, os.PathLike)) else getattr(file_obj, 'name', None)
    if not path:
        return default
    stem = os.path.splitext(os.path.basename(os.fspath(path)))[0]
    return stem or default

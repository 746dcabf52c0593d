from __future__ import annotations

import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

import pandas as pd

from .config import DEFAULTS, ExtractorConfig
from .errors import ExtractionError
from .export import build_csv_archive, dump_payload, table_preview
from .extraction import WorkflowExtraction, extract_workflow
from .io_utils import read_json_content, workflow_name

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ["ZIP (CSV)", "JSON"]
PREVIEW_LIMIT = 50


def empty_table(headers: List[str]) -> pd.DataFrame:
    return pd.DataFrame(columns=headers)


def table_frame(rows: List[Dict[str, Any]], headers: List[str], limit: int = PREVIEW_LIMIT) -> pd.DataFrame:
    if not rows:
        return empty_table(headers)
    return pd.DataFrame(table_preview(rows, headers, limit), columns=headers)


def build_status_message(extraction: WorkflowExtraction) -> str:
    stats = extraction.stats()
    message = (
        f"Successfully loaded. Modules: {stats['totalModules']} | "
        f"Conditions: {stats['totalConditions']} | "
        f"SDK keys: {stats['totalSdkKeys']}."
    )
    for pass_name, error in extraction.errors.items():
        message += f" Warning ({pass_name}): {error}."
    return message


def empty_outputs(message: str):
    return (
        None,
        "workflow",
        message,
        None,
        empty_table([]),
        empty_table([]),
        empty_table([]),
    )


def load_workflow_handler(file_obj, config: Optional[ExtractorConfig] = None):
    """Parse an uploaded workflow and build the three preview tables."""
    if file_obj is None:
        return empty_outputs("No file uploaded.")

    config = config or DEFAULTS
    try:
        document = read_json_content(file_obj, config)
    except ExtractionError as e:
        logger.error("Could not parse upload: %s", e)
        return empty_outputs(f"Error parsing JSON: {str(e)}")

    extraction = extract_workflow(document, config)
    tables = extraction.tables()
    previews = [table_frame(rows, headers) for rows, headers in tables.values()]
    return (
        extraction,
        workflow_name(file_obj),
        build_status_message(extraction),
        extraction.stats(),
        *previews,
    )


def export_workflow_handler(extraction: Optional[WorkflowExtraction], name: str, output_format: str, file_name: str):
    if extraction is None:
        return None, "No workflow loaded."

    # Only the base name is used so exports stay inside the temp dir.
    base_name = os.path.basename((file_name or '').strip()) or f"{name or 'workflow'}_extracted"
    ext = '.json' if output_format == "JSON" else '.zip'
    if not base_name.lower().endswith(ext):
        base_name += ext

    temp_dir = tempfile.gettempdir()
    path = os.path.join(temp_dir, base_name)

    try:
        if output_format == "JSON":
            with open(path, 'w', encoding='utf-8') as f:
                f.write(dump_payload(extraction.to_payload()))
        else:
            with open(path, 'wb') as f:
                f.write(build_csv_archive(extraction.tables(), name or 'workflow'))
    except OSError as e:
        logger.error("Export to %s failed: %s", path, e)
        return None, f"Error during export: {str(e)}"

    return path, f"Export successful! Saved to {path}"

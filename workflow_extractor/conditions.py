from __future__ import annotations

import logging
import sys
from typing import Any, Dict, List, Tuple

from .config import BRANCH_CONFIG_KEYS, CONDITION_PREFIX
from .errors import TraversalLimitError
from .keys import flatten_value

logger = logging.getLogger(__name__)

CONDITION_ID_COLUMN = 'conditionId'


class HeaderList:
    """Column names in first-seen order, without duplicates."""

    def __init__(self):
        self._names: List[str] = []
        self._seen = set()

    def add(self, name: str) -> None:
        if name not in self._seen:
            self._seen.add(name)
            self._names.append(name)

    def as_list(self) -> List[str]:
        return list(self._names)


def flatten_condition(condition_id: str, condition: Any, headers: HeaderList) -> Dict[str, str]:
    row: Dict[str, str] = {CONDITION_ID_COLUMN: condition_id}
    if not isinstance(condition, dict):
        logger.warning("Condition %s is not an object; emitting it without columns", condition_id)
        return row

    for key, value in condition.items():
        if key in BRANCH_CONFIG_KEYS and isinstance(value, dict):
            # Branch configs are flattened one level only.
            for nested_key, nested_value in value.items():
                column = f"{key}_{nested_key}"
                row[column] = flatten_value(nested_value)
                headers.add(column)
        else:
            row[key] = flatten_value(value)
            headers.add(key)
    return row


def extract_conditions(conditions_node: Any) -> Tuple[List[Dict[str, str]], List[str]]:
    """Flatten each `condition_*` entry into a row.

    Returns (rows, headers). Headers are the union of columns seen across
    all rows in first-seen order; `conditionId` is present in every row but
    is not listed in the headers.
    """
    if not isinstance(conditions_node, dict):
        return [], []

    headers = HeaderList()
    rows: List[Dict[str, str]] = []
    for condition_id, condition in conditions_node.items():
        if not isinstance(condition_id, str) or not condition_id.startswith(CONDITION_PREFIX):
            continue
        try:
            rows.append(flatten_condition(condition_id, condition, headers))
        except RecursionError:
            raise TraversalLimitError(
                f"condition scan: {condition_id} is nested too deeply to flatten", 'recursion', sys.getrecursionlimit()
            ) from None

    logger.debug("Condition scan produced %d rows", len(rows))
    return rows, headers.as_list()


def condition_columns(headers: List[str]) -> List[str]:
    """Export column order for the conditions table: conditionId first."""
    return [CONDITION_ID_COLUMN] + [h for h in headers if h != CONDITION_ID_COLUMN]

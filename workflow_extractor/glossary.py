from __future__ import annotations

import logging
from typing import Any, Dict, List, NamedTuple, Optional

from .config import GLOSSARY_PAYLOAD_KEYS, ExtractorConfig
from .keys import humanize_key
from .traversal import TraversalBudget

logger = logging.getLogger(__name__)

GLOSSARY_FIELDS = ['keyName', 'keyMeaning']


class KeyGlossaryEntry(NamedTuple):
    key_name: str
    key_meaning: str

    def as_row(self) -> Dict[str, str]:
        return {'keyName': self.key_name, 'keyMeaning': self.key_meaning}


def _is_present(value: Any) -> bool:
    # Empty containers still count as a payload; null/false/0/'' do not.
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def resolve_glossary_payload(document: Any) -> Any:
    """Pick `sdkResponse`, falling back to `sdkResponses`; None when neither is set."""
    if not isinstance(document, dict):
        return None
    for key in GLOSSARY_PAYLOAD_KEYS:
        value = document.get(key)
        if _is_present(value):
            return value
    return None


def collect_glossary(payload: Any, config: Optional[ExtractorConfig] = None) -> List[KeyGlossaryEntry]:
    """Collect leaf key names under payload with their humanized labels.

    Only dict values are descended into; lists and scalars are leaves. A
    payload that is itself a list is read as a sequence of objects, and its
    non-object elements are skipped. Keys are unique across the whole
    payload, so two leaves named `id` at different paths produce a single
    entry (the one visited last wins).
    """
    collected: Dict[str, str] = {}
    budget = TraversalBudget(config, scan='glossary')
    if isinstance(payload, dict):
        budget.enter(0)
        stack = [(iter(payload.items()), 0)]
    elif isinstance(payload, list):
        budget.enter(0)
        stack = []
        # Reversed so the first element is scanned first.
        for element in reversed(payload):
            if isinstance(element, dict):
                budget.enter(1)
                stack.append((iter(element.items()), 1))
    else:
        return []

    while stack:
        items, depth = stack[-1]
        try:
            key, value = next(items)
        except StopIteration:
            stack.pop()
            continue

        if isinstance(value, dict):
            budget.enter(depth + 1)
            stack.append((iter(value.items()), depth + 1))
        else:
            collected[key] = humanize_key(key)

    logger.debug("Glossary scan collected %d keys", len(collected))
    return [KeyGlossaryEntry(name, collected[name]) for name in sorted(collected)]

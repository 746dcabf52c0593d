from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .config import MODULE_ID_PREFIX, ExtractorConfig
from .keys import flatten_value
from .traversal import TraversalBudget, iter_containers

logger = logging.getLogger(__name__)

MODULE_FIELDS = [
    "category",
    "subcategory",
    "identifier",
    "nextStepReference",
    "name",
    "version",
    "stepReference",
]


@dataclass(frozen=True)
class ModuleRecord:
    category: str = ''
    subcategory: str = ''
    identifier: str = ''
    nextStepReference: str = ''
    name: str = ''
    version: str = ''
    stepReference: str = ''

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> 'ModuleRecord':
        return cls(**{field: module_field_text(node.get(field)) for field in MODULE_FIELDS})

    def as_row(self) -> Dict[str, str]:
        return asdict(self)


def module_field_text(value: Any) -> str:
    # Missing, None, 0, False and empty values all render as an empty cell.
    if not value:
        return ''
    return flatten_value(value)


def is_module_node(node: Any) -> bool:
    """True when a dict structurally looks like a workflow module.

    The `name` and `stepReference` keys only need to be present; their
    values may be anything, including null.
    """
    if not isinstance(node, dict):
        return False
    identifier = node.get('identifier')
    return (
        isinstance(identifier, str)
        and identifier.startswith(MODULE_ID_PREFIX)
        and isinstance(node.get('category'), str)
        and 'name' in node
        and 'stepReference' in node
    )


def extract_modules(document: Any, config: Optional[ExtractorConfig] = None) -> List[ModuleRecord]:
    """Collect every module node in the document, in discovery order.

    Matching a module does not stop the scan, so modules nested inside other
    modules are reported too.
    """
    budget = TraversalBudget(config, scan='module')
    modules: List[ModuleRecord] = []
    for node, _ in iter_containers(document, budget):
        if is_module_node(node):
            modules.append(ModuleRecord.from_node(node))

    logger.debug("Module scan found %d modules in %d nodes", len(modules), budget.visited)
    return modules

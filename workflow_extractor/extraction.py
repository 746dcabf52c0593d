from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .conditions import condition_columns, extract_conditions
from .config import CONDITIONS_KEY, DEFAULTS, ExtractorConfig
from .errors import TraversalLimitError
from .glossary import GLOSSARY_FIELDS, KeyGlossaryEntry, collect_glossary, resolve_glossary_payload
from .io_utils import parse_json_text
from .modules import MODULE_FIELDS, ModuleRecord, extract_modules

logger = logging.getLogger(__name__)


@dataclass
class WorkflowExtraction:
    modules: List[ModuleRecord] = field(default_factory=list)
    conditions: List[Dict[str, str]] = field(default_factory=list)
    condition_headers: List[str] = field(default_factory=list)
    glossary: List[KeyGlossaryEntry] = field(default_factory=list)
    # pass name -> message, for passes that ran out of budget
    errors: Dict[str, str] = field(default_factory=dict)

    def module_rows(self) -> List[Dict[str, str]]:
        return [m.as_row() for m in self.modules]

    def glossary_rows(self) -> List[Dict[str, str]]:
        return [e.as_row() for e in self.glossary]

    def tables(self) -> Dict[str, Tuple[List[Dict[str, str]], List[str]]]:
        return {
            'modules': (self.module_rows(), list(MODULE_FIELDS)),
            'conditions': (list(self.conditions), condition_columns(self.condition_headers)),
            'sdk': (self.glossary_rows(), list(GLOSSARY_FIELDS)),
        }

    def stats(self) -> Dict[str, Any]:
        module_types: List[str] = []
        for module in self.modules:
            if module.category not in module_types:
                module_types.append(module.category)
        return {
            'totalModules': len(self.modules),
            'totalConditions': len(self.conditions),
            'totalSdkKeys': len(self.glossary),
            'moduleTypes': module_types,
            'conditionKeys': list(self.condition_headers),
        }

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            'modules': self.module_rows(),
            'conditions': list(self.conditions),
            'sdk': self.glossary_rows(),
            'headers': {
                'modules': list(MODULE_FIELDS),
                'conditions': list(self.condition_headers),
                'sdk': list(GLOSSARY_FIELDS),
            },
            'stats': self.stats(),
        }
        if self.errors:
            payload['errors'] = dict(self.errors)
        return payload


def extract_workflow(document: Any, config: Optional[ExtractorConfig] = None) -> WorkflowExtraction:
    """Run the module, condition and glossary passes over one document.

    The passes are independent: one that exceeds its traversal budget leaves
    its dataset empty and records the failure in `errors` while the others
    still report.
    """
    config = config or DEFAULTS
    result = WorkflowExtraction()

    try:
        result.modules = extract_modules(document, config)
    except TraversalLimitError as exc:
        logger.warning("Module pass aborted: %s", exc)
        result.errors['modules'] = str(exc)

    conditions_node = document.get(CONDITIONS_KEY) if isinstance(document, dict) else None
    try:
        result.conditions, result.condition_headers = extract_conditions(conditions_node)
    except TraversalLimitError as exc:
        logger.warning("Condition pass aborted: %s", exc)
        result.errors['conditions'] = str(exc)

    try:
        result.glossary = collect_glossary(resolve_glossary_payload(document), config)
    except TraversalLimitError as exc:
        logger.warning("Glossary pass aborted: %s", exc)
        result.errors['sdk'] = str(exc)

    logger.info(
        "Extracted %d modules, %d conditions, %d SDK keys",
        len(result.modules),
        len(result.conditions),
        len(result.glossary),
    )
    return result


def extract_workflow_text(content, config: Optional[ExtractorConfig] = None) -> WorkflowExtraction:
    """Parse JSON text or bytes and extract it; parse errors abort the whole call."""
    return extract_workflow(parse_json_text(content, config), config)

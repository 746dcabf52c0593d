from __future__ import annotations

import logging
import os
from dataclasses import dataclass

MODULE_ID_PREFIX = 'module_'
CONDITION_PREFIX = 'condition_'
CONDITIONS_KEY = 'conditions'
BRANCH_CONFIG_KEYS = ('ifTrueConfigs', 'ifFalseConfigs')
# Checked in order; the first present payload wins.
GLOSSARY_PAYLOAD_KEYS = ('sdkResponse', 'sdkResponses')

ENV_PREFIX = 'WORKFLOW_EXTRACTOR_'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class ExtractorConfig:
    # Traversal budgets for untrusted documents
    max_depth: int = 256
    max_nodes: int = 1_000_000
    # Upload handling
    max_upload_bytes: int = 50 * 1024 * 1024
    log_level: str = 'INFO'

    def __post_init__(self):
        for name in ('max_depth', 'max_nodes', 'max_upload_bytes'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, environ=None) -> 'ExtractorConfig':
        """Build a config from `WORKFLOW_EXTRACTOR_*` environment variables."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for name in ('max_depth', 'max_nodes', 'max_upload_bytes'):
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None or raw.strip() == '':
                continue
            try:
                overrides[name] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}") from None
        level = environ.get(ENV_PREFIX + 'LOG_LEVEL')
        if level:
            overrides['log_level'] = level.strip().upper()
        return cls(**overrides)


# Global defaults used across modules
DEFAULTS = ExtractorConfig()


def configure_logging(level: str = 'INFO') -> logging.Logger:
    """Attach a console handler to the package logger (idempotent)."""
    logger = logging.getLogger('workflow_extractor')
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger

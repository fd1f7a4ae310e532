from __future__ import annotations

import logging

from prometheus_client import Counter

logger = logging.getLogger(__name__)

MISSING_NODE_URL = 'missing_node_url'
MISSING_CREDENTIAL = 'missing_credential'
UNMATCHED_EXTENSION = 'unmatched_extension'

CONFIG_WARNINGS_TOTAL = Counter(
    'chain_registry_config_warnings_total',
    'Non-fatal configuration warnings raised while building the chain registry',
    ['kind']
)


def emit_warning(kind: str, message: str) -> None:
    logger.warning('%s: %s', kind, message)
    CONFIG_WARNINGS_TOTAL.labels(kind=kind).inc()

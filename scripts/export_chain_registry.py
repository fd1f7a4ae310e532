#!/usr/bin/env python3
"""Build the chain registry once and write its public view as JSON.

Run from the repository root: ``python -m scripts.export_chain_registry``.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from apps.chains.catalog import read_catalog_file
from apps.chains.chain_registry import ChainRegistry, build_chain_registry
from apps.chains.config import get_settings
from apps.chains.extensions import CHAIN_EXTENSIONS

REPO_ROOT = Path(__file__).resolve().parents[1]
OUT_PATH = REPO_ROOT / 'data' / 'chain-registry.generated.json'
ENV_CANDIDATES = [REPO_ROOT / '.env', REPO_ROOT / 'environments' / '.env']

LOGGER = logging.getLogger('chain_registry.export')


def _load_env_files(paths: list[Path]) -> None:
    for path in paths:
        if path.exists():
            # Variables already set in the process environment win.
            load_dotenv(path, override=False)
            LOGGER.info('loaded environment from %s', path)


def export_payload(registry: ChainRegistry, environment: str) -> dict[str, Any]:
    return {
        'generated_at': datetime.now(timezone.utc).isoformat(),
        'environment': environment,
        'chains': registry.payload(),
        'supported_chain_ids': [chain.chain_id for chain in registry.supported_chains],
        'monitored_chain_ids': [chain.chain_id for chain in registry.monitored_chains]
    }


def main() -> None:
    parser = argparse.ArgumentParser(description='Export the resolved chain registry as JSON')
    parser.add_argument('--out', default=str(OUT_PATH), help='Output JSON path')
    parser.add_argument(
        '--env-file',
        action='append',
        default=[],
        help='Additional .env file to load (repeatable)'
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    _load_env_files(ENV_CANDIDATES + [Path(item) for item in args.env_file])
    get_settings.cache_clear()
    settings = get_settings()

    catalog = read_catalog_file(settings.chain_catalog_path)
    registry = build_chain_registry(catalog, CHAIN_EXTENSIONS, settings)

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(export_payload(registry, settings.environment), indent=2) + '\n', encoding='utf-8')
    print(f'generated {out_path}')


if __name__ == '__main__':
    main()

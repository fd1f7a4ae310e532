from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

logger = logging.getLogger(__name__)

NODE_URL_PREFIX = 'NODE_URL_'
ENVIRONMENT_ALIASES = {
    'dev': 'dev',
    'development': 'dev',
    'local': 'dev',
    'prod': 'prod',
    'production': 'prod',
    'test': 'test',
    'testing': 'test'
}


def _environment_from_env() -> str:
    raw = os.getenv('ENVIRONMENT', 'dev').strip().lower()
    environment = ENVIRONMENT_ALIASES.get(raw)
    if environment is None:
        logger.warning("Unknown ENVIRONMENT=%r, falling back to 'dev'", raw)
        return 'dev'
    return environment


def _env_str(name: str, default: str = '') -> str:
    return os.getenv(name, default).strip()


def _node_urls_from_env() -> dict[str, str]:
    urls: dict[str, str] = {}
    for key, value in os.environ.items():
        if not key.startswith(NODE_URL_PREFIX):
            continue
        sub_name = key[len(NODE_URL_PREFIX):].upper()
        if sub_name and value.strip():
            urls[sub_name] = value.strip()
    return urls


@dataclass(frozen=True)
class Settings:
    app_name: str
    environment: Literal['dev', 'prod', 'test']
    cors_origins: str
    chain_catalog_path: str
    node_urls: dict[str, str] = field(default_factory=dict)
    cf_access_client_id: str = ''
    cf_access_client_secret: str = ''
    alchemy_id: str = ''
    alchemy_id_optimism: str = ''
    alchemy_id_arbitrum: str = ''
    infura_id: str = ''

    @property
    def is_production(self) -> bool:
        return self.environment == 'prod'

    def node_url(self, sub_name: str) -> str | None:
        return self.node_urls.get(sub_name.upper())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    environment = _environment_from_env()

    return Settings(
        app_name=os.getenv('APP_NAME', 'chain-registry-api'),
        environment=environment,  # type: ignore[arg-type]
        cors_origins=os.getenv('CORS_ORIGINS', 'http://localhost:3000'),
        chain_catalog_path=os.getenv('CHAIN_CATALOG_PATH', 'data/chains.json'),
        node_urls=_node_urls_from_env(),
        cf_access_client_id=_env_str('CF_ACCESS_CLIENT_ID'),
        cf_access_client_secret=_env_str('CF_ACCESS_CLIENT_SECRET'),
        alchemy_id=_env_str('ALCHEMY_ID'),
        alchemy_id_optimism=_env_str('ALCHEMY_ID_OPTIMISM'),
        alchemy_id_arbitrum=_env_str('ALCHEMY_ID_ARBITRUM'),
        infura_id=_env_str('INFURA_ID')
    )

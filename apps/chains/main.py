from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_client import Gauge, make_asgi_app

from .chain_registry import ChainRegistry, get_chain_registry
from .config import get_settings
from .errors import ChainValidationError, UnknownChain

settings = get_settings()
logger = logging.getLogger(__name__)

REGISTERED_CHAINS = Gauge(
    'chain_registry_chains',
    'Chains in the registry by view',
    ['view']
)

app = FastAPI(title=settings.app_name, default_response_class=ORJSONResponse)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[x.strip() for x in settings.cors_origins.split(',') if x.strip()],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*']
)
app.mount('/metrics', make_asgi_app())

_registry: ChainRegistry | None = None


@app.on_event('startup')
async def startup() -> None:
    global _registry
    # Fatal catalog errors propagate and abort startup.
    _registry = get_chain_registry()
    REGISTERED_CHAINS.labels(view='all').set(len(_registry.all))
    REGISTERED_CHAINS.labels(view='supported').set(len(_registry.supported))
    REGISTERED_CHAINS.labels(view='monitored').set(len(_registry.monitored))
    logger.info('Serving %d chains (environment=%s)', len(_registry.all), settings.environment)


@app.get('/health')
async def health() -> dict[str, str]:
    return {'status': 'ok'}


@app.get('/health/ready')
async def ready() -> dict[str, str]:
    if _registry is None:
        raise HTTPException(status_code=503, detail='chain registry not built')
    return {'status': 'ready'}


@app.get('/chains')
async def chains(registry: ChainRegistry = Depends(get_chain_registry)) -> list[dict]:
    return registry.payload()


@app.get('/chains/supported')
async def supported_chains(registry: ChainRegistry = Depends(get_chain_registry)) -> list[dict]:
    return [chain.public_payload() for chain in registry.supported_chains]


@app.get('/chains/monitored')
async def monitored_chains(registry: ChainRegistry = Depends(get_chain_registry)) -> list[dict]:
    return [chain.public_payload() for chain in registry.monitored_chains]


@app.get('/chains/{chain_id}')
async def chain_detail(chain_id: str, registry: ChainRegistry = Depends(get_chain_registry)) -> dict:
    chain = registry.get(chain_id)
    if chain is None:
        exc = UnknownChain(chain_id)
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return chain.public_payload()


@app.get('/chains/{chain_id}/supported')
async def chain_supported(chain_id: str, registry: ChainRegistry = Depends(get_chain_registry)) -> dict:
    try:
        registry.check_supported_chain_id(chain_id)
    except ChainValidationError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return {'chain_id': chain_id, 'supported': True}


@app.get('/')
async def root() -> dict:
    return {'service': settings.app_name, 'status': 'ok'}

from __future__ import annotations

from collections.abc import Iterable

from .config import Settings
from .events import MISSING_CREDENTIAL, MISSING_NODE_URL, emit_warning
from .models import ProviderRpc, RpcEndpoint

ALCHEMY_DOMAIN = 'g.alchemy.com'
INFURA_PLACEHOLDER = '{INFURA_API_KEY}'


def own_node_endpoint(settings: Settings, sub_name: str) -> RpcEndpoint | None:
    url = settings.node_url(sub_name)
    env_name = f'NODE_URL_{sub_name.upper()}'
    if not url:
        emit_warning(MISSING_NODE_URL, f'Environment variable {env_name} not set!')
        return None

    headers = {'Content-Type': 'application/json'}
    if settings.cf_access_client_id:
        headers['CF-Access-Client-Id'] = settings.cf_access_client_id
    if settings.cf_access_client_secret:
        headers['CF-Access-Client-Secret'] = settings.cf_access_client_secret
    return RpcEndpoint(url=url, headers=headers)


def alchemy_key(settings: Settings, family: str) -> str:
    if family == 'opt':
        return settings.alchemy_id_optimism or settings.alchemy_id
    if family == 'arb':
        return settings.alchemy_id_arbitrum or settings.alchemy_id
    return settings.alchemy_id


def alchemy_endpoint(settings: Settings, sub_name: str, family: str) -> RpcEndpoint | None:
    key = alchemy_key(settings, family)
    if not key:
        emit_warning(MISSING_CREDENTIAL, f'Environment variable ALCHEMY_ID not set for {family} {sub_name}!')
        return None
    return RpcEndpoint(url=f'https://{family}-{sub_name}.{ALCHEMY_DOMAIN}/v2/{key}', secret=True)


def template_endpoint(settings: Settings, template: str) -> RpcEndpoint:
    # https://<network>.infura.io/v3/{INFURA_API_KEY}
    if INFURA_PLACEHOLDER not in template:
        return RpcEndpoint(url=template)
    return RpcEndpoint(
        url=template.replace(INFURA_PLACEHOLDER, settings.infura_id),
        secret=bool(settings.infura_id)
    )


def resolve_endpoints(
    settings: Settings,
    templates: Iterable[str] = (),
    provider: ProviderRpc | None = None
) -> tuple[RpcEndpoint, ...]:
    """Endpoints in priority order: operator node, Alchemy, then catalog templates.

    Missing configuration only drops the affected endpoint, so the result may be empty.
    """
    endpoints: list[RpcEndpoint] = []

    if provider is not None:
        if provider.use_own_node:
            own = own_node_endpoint(settings, provider.sub_name)
            if own is not None:
                endpoints.append(own)
        hosted = alchemy_endpoint(settings, provider.sub_name, provider.family)
        if hosted is not None:
            endpoints.append(hosted)

    for template in templates:
        template = template.strip()
        if template:
            endpoints.append(template_endpoint(settings, template))

    return tuple(endpoints)

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from .catalog import ChainRecord, load_catalog, read_catalog_file
from .config import Settings, get_settings
from .endpoints import resolve_endpoints
from .errors import ChainNotSupported, DuplicateChainId, UnknownChain
from .events import UNMATCHED_EXTENSION, emit_warning
from .extensions import CHAIN_EXTENSIONS
from .local_chains import LOCAL_CHAINS, local_chains_enabled
from .models import ChainExtension, ResolvedChain
from .sorting import CANONICAL_CHAIN_IDS, apply_canonical_titles, sort_chains

logger = logging.getLogger(__name__)

ANY_CHAIN_ID = '0'
MAX_CHAIN_ID_DIGITS = 32


def _coerce_chain_id(value: int | str) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    # ASCII digits only; str.isdigit() also accepts superscripts int() rejects.
    if not text or len(text) > MAX_CHAIN_ID_DIGITS or not (text.isascii() and text.isdigit()):
        return None
    try:
        return int(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class ChainRegistry:
    all: Mapping[int, ResolvedChain]
    supported: Mapping[int, ResolvedChain]
    monitored: Mapping[int, ResolvedChain]
    sorted_chains: tuple[ResolvedChain, ...]

    @property
    def supported_chains(self) -> tuple[ResolvedChain, ...]:
        return tuple(chain for chain in self.sorted_chains if chain.supported)

    @property
    def monitored_chains(self) -> tuple[ResolvedChain, ...]:
        return tuple(chain for chain in self.sorted_chains if chain.monitored)

    def get(self, chain_id: int | str) -> ResolvedChain | None:
        key = _coerce_chain_id(chain_id)
        if key is None:
            return None
        return self.all.get(key)

    def check_supported_chain_id(self, chain_id: int | str) -> bool:
        """Whether the chain accepts verification requests.

        A chain can stay registered after verification support is dropped
        (e.g. Goerli), so being known is not enough.
        """
        chain = self.get(chain_id)
        if chain is None or not chain.supported:
            raise ChainNotSupported(chain_id)
        return True

    def check_sourcify_chain_id(self, chain_id: int | str) -> bool:
        """Whether the chain is registered at all; "0" stands for any chain."""
        if str(chain_id).strip() == ANY_CHAIN_ID:
            return True
        if self.get(chain_id) is None:
            raise UnknownChain(chain_id)
        return True

    def payload(self) -> list[dict[str, Any]]:
        return [chain.public_payload() for chain in self.sorted_chains]


def merge_chain(record: ChainRecord, extension: ChainExtension, settings: Settings) -> ResolvedChain:
    templates = extension.rpc if extension.rpc is not None else record.rpc
    currency = record.native_currency.to_native() if record.native_currency is not None else None
    return ResolvedChain(
        chain_id=record.chain_id,
        name=record.name,
        short_name=record.short_name,
        title=record.title,
        chain=record.chain,
        network=record.network,
        network_id=record.network_id,
        native_currency=currency,
        info_url=record.info_url,
        faucets=tuple(record.faucets),
        rpc=resolve_endpoints(settings, templates, extension.provider),
        supported=extension.supported,
        monitored=extension.monitored,
        contract_fetch_address=extension.contract_fetch_address,
        tx_regex=extension.tx_regex
    )


def build_chain_registry(
    catalog: Iterable[ChainRecord | Mapping[str, Any]],
    extensions: Mapping[int, ChainExtension],
    settings: Settings,
    local_chains: Iterable[ResolvedChain] = LOCAL_CHAINS,
    canonical_ids: Iterable[int] = CANONICAL_CHAIN_IDS
) -> ChainRegistry:
    records = load_catalog(catalog)
    local_chains = tuple(local_chains)
    local_ids = {chain.chain_id for chain in local_chains}
    allow_local_override = local_chains_enabled(settings)

    chains: dict[int, ResolvedChain] = {}
    if allow_local_override:
        for chain in local_chains:
            chains[chain.chain_id] = chain

    catalog_ids: set[int] = set()
    for record in records:
        chain_id = record.chain_id
        if chain_id in chains or chain_id in catalog_ids:
            # Local chains override the catalog entry outside production.
            if allow_local_override and chain_id in local_ids:
                catalog_ids.add(chain_id)
                continue
            raise DuplicateChainId(chain_id)
        catalog_ids.add(chain_id)

        extension = extensions.get(chain_id)
        if extension is None:
            continue
        chains[chain_id] = merge_chain(record, extension, settings)

    for chain_id in extensions:
        if chain_id not in catalog_ids and chain_id not in chains:
            emit_warning(UNMATCHED_EXTENSION, f'Extension for chain {chain_id} has no catalog entry; ignored')

    canonical_ids = tuple(canonical_ids)
    chains = apply_canonical_titles(chains, canonical_ids)
    sorted_chains = tuple(sort_chains(chains, canonical_ids))

    logger.info(
        'Chain registry built: %d chains (%d supported, %d monitored) from %d catalog records',
        len(chains),
        sum(1 for chain in chains.values() if chain.supported),
        sum(1 for chain in chains.values() if chain.monitored),
        len(records)
    )

    return ChainRegistry(
        all=MappingProxyType(chains),
        supported=MappingProxyType({k: v for k, v in chains.items() if v.supported}),
        monitored=MappingProxyType({k: v for k, v in chains.items() if v.monitored}),
        sorted_chains=sorted_chains
    )


@lru_cache(maxsize=1)
def get_chain_registry() -> ChainRegistry:
    settings = get_settings()
    catalog = read_catalog_file(settings.chain_catalog_path)
    return build_chain_registry(catalog, CHAIN_EXTENSIONS, settings)

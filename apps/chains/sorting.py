from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import ResolvedChain

# Ethereum mainnet, then current and historical testnets.
CANONICAL_CHAIN_IDS: tuple[int, ...] = (1, 5, 11155111, 3, 4, 42)


def apply_canonical_titles(
    chains: Mapping[int, ResolvedChain],
    canonical_ids: Iterable[int] = CANONICAL_CHAIN_IDS
) -> dict[int, ResolvedChain]:
    pinned = set(canonical_ids)
    return {
        chain_id: chain.with_display_name() if chain_id in pinned else chain
        for chain_id, chain in chains.items()
    }


def _primary_sort_key(chain: ResolvedChain) -> str:
    # Catalog name first; title only when the name is empty.
    return chain.name or chain.title or ''


def sort_chains(
    chains: Mapping[int, ResolvedChain],
    canonical_ids: Iterable[int] = CANONICAL_CHAIN_IDS
) -> list[ResolvedChain]:
    canonical_ids = tuple(canonical_ids)
    pinned = [chains[chain_id] for chain_id in canonical_ids if chain_id in chains]
    others = [chain for chain_id, chain in chains.items() if chain_id not in canonical_ids]
    # list.sort is stable, so equal names keep registration order.
    others.sort(key=_primary_sort_key)
    return pinned + others

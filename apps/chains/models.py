from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

ChainFamily = Literal['eth', 'polygon', 'arb', 'opt']


@dataclass(frozen=True)
class NativeCurrency:
    name: str
    symbol: str
    decimals: int = 18


@dataclass(frozen=True)
class RpcEndpoint:
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    # URL embeds a credential and must not leave the process.
    secret: bool = False

    @property
    def authenticated(self) -> bool:
        return bool(self.headers) or self.secret


@dataclass(frozen=True)
class ProviderRpc:
    """Request for dynamic endpoint resolution.

    ``sub_name`` is the provider subnetwork ("mainnet", "sepolia"...) and
    ``family`` the provider's chain prefix. ``use_own_node`` puts the operator
    node configured under ``NODE_URL_<SUB_NAME>`` in front of the provider.
    """

    sub_name: str
    family: ChainFamily
    use_own_node: bool = False


@dataclass(frozen=True)
class ChainExtension:
    supported: bool
    monitored: bool
    rpc: tuple[str, ...] | None = None
    provider: ProviderRpc | None = None
    contract_fetch_address: str | None = None
    tx_regex: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ResolvedChain:
    chain_id: int
    name: str
    short_name: str = ''
    title: str | None = None
    chain: str = ''
    network: str = ''
    network_id: int | None = None
    native_currency: NativeCurrency | None = None
    info_url: str = ''
    faucets: tuple[str, ...] = ()
    rpc: tuple[RpcEndpoint, ...] = ()
    supported: bool = False
    monitored: bool = False
    contract_fetch_address: str | None = None
    tx_regex: tuple[str, ...] | None = None

    def with_display_name(self) -> ResolvedChain:
        # Long form for pinned chains, e.g. "Ethereum Testnet Goerli" instead of "Goerli".
        if self.title and self.title != self.name:
            return replace(self, name=self.title)
        return self

    def public_payload(self) -> dict[str, Any]:
        currency = self.native_currency
        return {
            'chainId': self.chain_id,
            'name': self.name,
            'shortName': self.short_name,
            'title': self.title,
            'chain': self.chain,
            'network': self.network,
            'networkId': self.network_id,
            'nativeCurrency': (
                {'name': currency.name, 'symbol': currency.symbol, 'decimals': currency.decimals}
                if currency is not None
                else None
            ),
            'infoURL': self.info_url,
            'faucets': list(self.faucets),
            'rpc': [endpoint.url for endpoint in self.rpc if not endpoint.authenticated],
            'supported': self.supported,
            'monitored': self.monitored,
            'contractFetchAddress': self.contract_fetch_address,
            'txRegex': list(self.tx_regex) if self.tx_regex is not None else None
        }

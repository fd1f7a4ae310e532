from __future__ import annotations

from .config import Settings
from .models import NativeCurrency, ResolvedChain, RpcEndpoint

LOCAL_RPC_URL = 'http://localhost:8545'
LOCAL_CURRENCY = NativeCurrency(name='localETH', symbol='localETH', decimals=18)

LOCAL_CHAINS: tuple[ResolvedChain, ...] = (
    ResolvedChain(
        chain_id=1337,
        name='Ganache Localhost',
        short_name='Ganache',
        network='testnet',
        network_id=1337,
        native_currency=LOCAL_CURRENCY,
        info_url='localhost',
        rpc=(RpcEndpoint(LOCAL_RPC_URL),),
        supported=True,
        monitored=True
    ),
    ResolvedChain(
        chain_id=31337,
        name='Hardhat Network Localhost',
        short_name='Hardhat Network',
        network='testnet',
        network_id=31337,
        native_currency=LOCAL_CURRENCY,
        info_url='localhost',
        rpc=(RpcEndpoint(LOCAL_RPC_URL),),
        supported=True,
        monitored=True
    )
)


def local_chains_enabled(settings: Settings) -> bool:
    return not settings.is_production

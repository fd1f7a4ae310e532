from __future__ import annotations

from .models import ChainExtension, ProviderRpc

# Regexes are kept as strings so they serialize in the /chains response.
ETHERSCAN_REGEX = ('at txn.*href=.*/tx/(0x.{64})',)
ETHERSCAN_SUFFIX = 'address/${ADDRESS}'
BLOCKSCOUT_REGEX_OLD = 'transaction_hash_link" href="${BLOCKSCOUT_PREFIX}/tx/(.*?)"'
BLOCKSCOUT_REGEX_NEW = 'at txn.*href.*/tx/(0x.{64}?)'
BLOCKSCOUT_SUFFIX = 'address/${ADDRESS}/transactions'


def blockscout_regex(blockscout_prefix: str = '') -> tuple[str, ...]:
    return (
        BLOCKSCOUT_REGEX_OLD.replace('${BLOCKSCOUT_PREFIX}', blockscout_prefix),
        BLOCKSCOUT_REGEX_NEW
    )


CHAIN_EXTENSIONS: dict[int, ChainExtension] = {
    1: ChainExtension(  # Ethereum Mainnet
        supported=True,
        monitored=True,
        provider=ProviderRpc(sub_name='mainnet', family='eth', use_own_node=True),
        contract_fetch_address='https://etherscan.io/' + ETHERSCAN_SUFFIX,
        tx_regex=ETHERSCAN_REGEX
    ),
    5: ChainExtension(  # Ethereum Testnet Goerli
        supported=False,
        monitored=False
    ),
    11155111: ChainExtension(  # Ethereum Testnet Sepolia
        supported=True,
        monitored=True,
        provider=ProviderRpc(sub_name='sepolia', family='eth', use_own_node=True),
        contract_fetch_address='https://sepolia.etherscan.io/' + ETHERSCAN_SUFFIX,
        tx_regex=ETHERSCAN_REGEX
    ),
    10: ChainExtension(  # Optimism
        supported=True,
        monitored=False,
        provider=ProviderRpc(sub_name='mainnet', family='opt')
    ),
    42161: ChainExtension(  # Arbitrum One
        supported=True,
        monitored=False,
        provider=ProviderRpc(sub_name='mainnet', family='arb')
    ),
    100: ChainExtension(  # Gnosis
        supported=True,
        monitored=False,
        contract_fetch_address='https://blockscout.com/xdai/mainnet/' + BLOCKSCOUT_SUFFIX,
        tx_regex=blockscout_regex('/xdai/mainnet')
    ),
    137: ChainExtension(  # Polygon Mainnet
        supported=True,
        monitored=False,
        provider=ProviderRpc(sub_name='mainnet', family='polygon')
    ),
    16718: ChainExtension(  # Ambrosus Mainnet
        supported=True,
        monitored=False
    ),
    30746: ChainExtension(  # Ambrosus Devnet
        supported=True,
        monitored=False
    ),
    22040: ChainExtension(  # Ambrosus Testnet
        supported=True,
        monitored=False
    ),
}

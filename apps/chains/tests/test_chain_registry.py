import unittest
from unittest.mock import patch

from apps.chains.catalog import load_catalog
from apps.chains.chain_registry import build_chain_registry, get_chain_registry, merge_chain
from apps.chains.config import Settings, get_settings
from apps.chains.errors import DuplicateChainId, MalformedCatalog
from apps.chains.models import ChainExtension, ProviderRpc

CATALOG = [
    {
        'chainId': 1,
        'name': 'Ethereum Mainnet',
        'shortName': 'eth',
        'nativeCurrency': {'name': 'Ether', 'symbol': 'ETH', 'decimals': 18},
        'rpc': ['https://mainnet.infura.io/v3/{INFURA_API_KEY}', 'https://cloudflare-eth.com']
    },
    {'chainId': 5, 'name': 'Goerli', 'title': 'Ethereum Testnet Goerli', 'rpc': []},
    {'chainId': 56, 'name': 'Binance Smart Chain Mainnet', 'rpc': ['https://bsc-dataseed1.binance.org']},
    {'chainId': 1337, 'name': 'Geth Testnet', 'rpc': ['http://127.0.0.1:8545']},
    {'chainId': 16718, 'name': 'AirDAO Mainnet', 'rpc': ['https://network.ambrosus.io']}
]

EXTENSIONS = {
    1: ChainExtension(supported=True, monitored=True),
    5: ChainExtension(supported=False, monitored=False),
    1337: ChainExtension(supported=False, monitored=False),
    16718: ChainExtension(supported=True, monitored=False)
}


def make_settings(environment: str = 'dev', **overrides) -> Settings:
    values = {
        'app_name': 'chain-registry-test',
        'environment': environment,
        'cors_origins': '',
        'chain_catalog_path': 'data/chains.json'
    }
    values.update(overrides)
    return Settings(**values)


class RegistryBuilderTests(unittest.TestCase):
    def test_registers_only_extended_and_local_chains(self) -> None:
        registry = build_chain_registry(CATALOG, EXTENSIONS, make_settings())

        self.assertEqual(set(registry.all), {1, 5, 1337, 16718, 31337})
        self.assertIsNone(registry.get(56))

    def test_extension_flags_win(self) -> None:
        registry = build_chain_registry(CATALOG, EXTENSIONS, make_settings())

        self.assertTrue(registry.all[16718].supported)
        self.assertFalse(registry.all[16718].monitored)
        self.assertFalse(registry.all[5].supported)
        self.assertEqual(registry.all[16718].name, 'AirDAO Mainnet')
        self.assertEqual(registry.all[1].native_currency.symbol, 'ETH')

    def test_filtered_views_are_subsets_of_all(self) -> None:
        registry = build_chain_registry(CATALOG, EXTENSIONS, make_settings())

        self.assertEqual(set(registry.supported), {1, 1337, 16718, 31337})
        self.assertEqual(set(registry.monitored), {1, 1337, 31337})
        for chain_id, chain in registry.supported.items():
            self.assertIs(registry.all[chain_id], chain)
        for chain_id in registry.monitored:
            self.assertIn(chain_id, registry.all)
        self.assertEqual(
            [chain.chain_id for chain in registry.supported_chains],
            [chain.chain_id for chain in registry.sorted_chains if chain.supported]
        )

    def test_duplicate_catalog_chain_id_is_fatal(self) -> None:
        catalog = CATALOG + [{'chainId': 16718, 'name': 'AirDAO Mainnet copy'}]
        with self.assertRaises(DuplicateChainId) as ctx:
            build_chain_registry(catalog, EXTENSIONS, make_settings())
        self.assertEqual(ctx.exception.chain_id, 16718)

    def test_duplicate_of_unextended_chain_is_fatal(self) -> None:
        catalog = CATALOG + [{'chainId': 56, 'name': 'BNB Chain'}]
        with self.assertRaises(DuplicateChainId):
            build_chain_registry(catalog, EXTENSIONS, make_settings('prod'))

    def test_local_chain_overrides_catalog_outside_production(self) -> None:
        catalog = CATALOG + [{'chainId': 1337, 'name': 'Geth Testnet again'}]
        registry = build_chain_registry(catalog, EXTENSIONS, make_settings('dev'))

        local = registry.all[1337]
        self.assertEqual(local.name, 'Ganache Localhost')
        self.assertTrue(local.supported)
        self.assertEqual(local.rpc[0].url, 'http://localhost:8545')

    def test_local_chain_collision_is_fatal_in_production(self) -> None:
        catalog = CATALOG + [{'chainId': 1337, 'name': 'Geth Testnet again'}]
        with self.assertRaises(DuplicateChainId):
            build_chain_registry(catalog, EXTENSIONS, make_settings('prod'))

    def test_production_excludes_local_chains(self) -> None:
        registry = build_chain_registry(CATALOG, EXTENSIONS, make_settings('prod'))

        self.assertNotIn(31337, registry.all)
        # The catalog's own 1337 entry takes the extension in production.
        self.assertEqual(registry.all[1337].name, 'Geth Testnet')
        self.assertFalse(registry.all[1337].supported)

    def test_malformed_catalog_aborts_build(self) -> None:
        with self.assertRaises(MalformedCatalog):
            build_chain_registry(CATALOG + [{'name': 'No id'}], EXTENSIONS, make_settings())

    def test_unmatched_extension_is_ignored_with_warning(self) -> None:
        extensions = dict(EXTENSIONS)
        extensions[999999] = ChainExtension(supported=True, monitored=True)
        with self.assertLogs('apps.chains.events', level='WARNING') as logs:
            registry = build_chain_registry(CATALOG, extensions, make_settings())

        self.assertNotIn(999999, registry.all)
        self.assertIn('999999', '\n'.join(logs.output))

    def test_building_twice_is_idempotent(self) -> None:
        first = build_chain_registry(CATALOG, EXTENSIONS, make_settings())
        second = build_chain_registry(CATALOG, EXTENSIONS, make_settings())

        self.assertEqual(dict(first.all), dict(second.all))
        self.assertEqual(dict(first.supported), dict(second.supported))
        self.assertEqual(dict(first.monitored), dict(second.monitored))
        self.assertEqual(first.sorted_chains, second.sorted_chains)

    def test_registry_is_read_only(self) -> None:
        registry = build_chain_registry(CATALOG, EXTENSIONS, make_settings())
        with self.assertRaises(TypeError):
            registry.all[42] = registry.all[1]  # type: ignore[index]

    def test_pinned_chain_uses_title_everywhere(self) -> None:
        registry = build_chain_registry(CATALOG, EXTENSIONS, make_settings())

        self.assertEqual(registry.all[5].name, 'Ethereum Testnet Goerli')
        self.assertEqual(registry.sorted_chains[1].name, 'Ethereum Testnet Goerli')


class MergeChainTests(unittest.TestCase):
    def test_extension_rpc_replaces_catalog_templates(self) -> None:
        record = load_catalog([CATALOG[0]])[0]
        extension = ChainExtension(supported=True, monitored=False, rpc=('https://rpc.example.org',))

        chain = merge_chain(record, extension, make_settings())

        self.assertEqual([endpoint.url for endpoint in chain.rpc], ['https://rpc.example.org'])
        self.assertEqual(chain.short_name, 'eth')

    def test_catalog_templates_are_inherited(self) -> None:
        record = load_catalog([CATALOG[0]])[0]
        chain = merge_chain(record, ChainExtension(supported=True, monitored=True), make_settings(infura_id='k'))

        self.assertEqual(
            [endpoint.url for endpoint in chain.rpc],
            ['https://mainnet.infura.io/v3/k', 'https://cloudflare-eth.com']
        )

    def test_provider_request_is_resolved(self) -> None:
        record = load_catalog([CATALOG[0]])[0]
        extension = ChainExtension(
            supported=True,
            monitored=True,
            provider=ProviderRpc(sub_name='mainnet', family='eth', use_own_node=True)
        )
        settings = make_settings(node_urls={'MAINNET': 'https://node.example.org'}, alchemy_id='key')

        chain = merge_chain(record, extension, settings)

        self.assertEqual(chain.rpc[0].url, 'https://node.example.org')
        self.assertEqual(chain.rpc[1].url, 'https://eth-mainnet.g.alchemy.com/v2/key')
        self.assertEqual(len(chain.rpc), 4)


class DefaultRegistryTests(unittest.TestCase):
    def tearDown(self) -> None:
        get_settings.cache_clear()
        get_chain_registry.cache_clear()

    def test_builds_from_bundled_catalog(self) -> None:
        with patch.dict('os.environ', {'ENVIRONMENT': 'dev', 'CHAIN_CATALOG_PATH': 'data/chains.json'}, clear=False):
            get_settings.cache_clear()
            get_chain_registry.cache_clear()
            registry = get_chain_registry()

        self.assertIs(registry, get_chain_registry())
        self.assertEqual(
            [chain.chain_id for chain in registry.sorted_chains],
            [1, 5, 11155111, 16718, 22040, 30746, 42161, 1337, 100, 31337, 10, 137]
        )
        self.assertTrue(registry.check_supported_chain_id('16718'))
        self.assertEqual(registry.all[11155111].name, 'Ethereum Testnet Sepolia')

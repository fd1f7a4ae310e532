import unittest
from unittest.mock import patch

from apps.chains.config import get_settings
from apps.chains.local_chains import local_chains_enabled


class SettingsTests(unittest.TestCase):
    def tearDown(self) -> None:
        get_settings.cache_clear()

    def test_reads_provider_and_node_configuration(self) -> None:
        with patch.dict(
            'os.environ',
            {
                'ENVIRONMENT': 'prod',
                'NODE_URL_MAINNET': 'https://node.example.org/mainnet',
                'NODE_URL_sepolia': ' https://node.example.org/sepolia ',
                'NODE_URL_GOERLI': '',
                'ALCHEMY_ID': 'alchemy',
                'ALCHEMY_ID_OPTIMISM': 'optimism',
                'INFURA_ID': 'infura'
            },
            clear=False
        ):
            get_settings.cache_clear()
            settings = get_settings()

        self.assertTrue(settings.is_production)
        self.assertFalse(local_chains_enabled(settings))
        self.assertEqual(settings.node_url('mainnet'), 'https://node.example.org/mainnet')
        self.assertEqual(settings.node_url('SEPOLIA'), 'https://node.example.org/sepolia')
        self.assertIsNone(settings.node_url('goerli'))
        self.assertEqual(settings.alchemy_id_optimism, 'optimism')
        self.assertEqual(settings.infura_id, 'infura')

    def test_unknown_environment_falls_back_to_dev(self) -> None:
        with patch.dict('os.environ', {'ENVIRONMENT': 'staging'}, clear=False):
            get_settings.cache_clear()
            with self.assertLogs('apps.chains.config', level='WARNING') as logs:
                settings = get_settings()

        self.assertEqual(settings.environment, 'dev')
        self.assertTrue(local_chains_enabled(settings))
        self.assertIn('staging', '\n'.join(logs.output))

    def test_long_environment_names_are_accepted(self) -> None:
        for raw, expected in (('production', 'prod'), (' Production ', 'prod'), ('development', 'dev'), ('testing', 'test')):
            with patch.dict('os.environ', {'ENVIRONMENT': raw}, clear=False):
                get_settings.cache_clear()
                with self.assertNoLogs('apps.chains.config', level='WARNING'):
                    settings = get_settings()
            self.assertEqual(settings.environment, expected)

        with patch.dict('os.environ', {'ENVIRONMENT': 'production'}, clear=False):
            get_settings.cache_clear()
            settings = get_settings()
        self.assertTrue(settings.is_production)
        self.assertFalse(local_chains_enabled(settings))

    def test_settings_are_read_once(self) -> None:
        with patch.dict('os.environ', {'ENVIRONMENT': 'test'}, clear=False):
            get_settings.cache_clear()
            first = get_settings()
        with patch.dict('os.environ', {'ENVIRONMENT': 'prod'}, clear=False):
            self.assertIs(get_settings(), first)
            self.assertEqual(get_settings().environment, 'test')

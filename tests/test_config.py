import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from downloader.config import Config
from downloader.errors import ConfigError


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        env = mock.patch.dict(os.environ)
        env.start()
        self.addCleanup(env.stop)
        for name in ("PEXELS_API_KEY", "DOWNLOADER_DESTINATION", "DOWNLOADER_QUERY", "FETCHER_TIMEOUT", "LOG_LEVEL"):
            os.environ.pop(name, None)

    def write(self, text):
        path = Path(self.tmp.name) / "config.yaml"
        path.write_text(text)
        return str(path)

    def test_bundled_defaults(self):
        config = Config()
        self.assertEqual(config.downloader.get('query'), "people")
        self.assertIsNone(config.fetcher.get('timeout'))
        self.assertEqual(config.logging.get('level'), "INFO")

    def test_reads_yaml(self):
        config = Config(self.write("pexels:\n  api_key: k1\nfetcher:\n  timeout: 12.5\n"))
        self.assertEqual(config.pexels['api_key'], "k1")
        self.assertEqual(config.get('fetcher', 'timeout'), 12.5)
        self.assertEqual(config.get('downloader', 'query', default="people"), "people")

    def test_environment_overrides(self):
        os.environ["PEXELS_API_KEY"] = "from-env"
        os.environ["FETCHER_TIMEOUT"] = "30"
        os.environ["DOWNLOADER_QUERY"] = "mountains"

        config = Config(self.write("pexels:\n  api_key: k1\n"))

        self.assertEqual(config.pexels['api_key'], "from-env")
        self.assertEqual(config.fetcher['timeout'], 30)
        self.assertEqual(config.downloader['query'], "mountains")

    def test_timeout_must_be_numeric(self):
        os.environ["FETCHER_TIMEOUT"] = "soon"
        with self.assertRaises(ConfigError):
            Config(self.write("fetcher:\n  timeout:\n"))

    def test_timeout_rejects_bool_and_non_positive(self):
        for value in ("true", "0", "-5"):
            with self.subTest(value=value):
                with self.assertRaises(ConfigError):
                    Config(self.write(f"fetcher:\n  timeout: {value}\n"))

    def test_empty_file(self):
        config = Config(self.write(""))
        self.assertEqual(config.pexels, {})

    def test_missing_explicit_file(self):
        with self.assertRaises(ConfigError):
            Config(str(Path(self.tmp.name) / "missing.yaml"))

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigError):
            Config(self.write("pexels: [unclosed\n"))

    def test_non_mapping(self):
        with self.assertRaises(ConfigError):
            Config(self.write("- a\n- b\n"))


if __name__ == '__main__':
    unittest.main()

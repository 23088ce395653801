"""
tests/test_config.py
Test cases for configuration loading, overrides and validation
"""

import json
import os

from tests import BaseTestCase
from config.settings import (
    SuiteConfig,
    LocalConfig,
    CIConfig,
    get_config,
)


class TestConfigDefaults(BaseTestCase):
    """Built-in defaults when no config file exists"""

    def test_default_base_url(self):
        self.assertEqual(SuiteConfig.BASE_URL(), "https://jsonplaceholder.typicode.com")

    def test_default_auth_token(self):
        self.assertEqual(SuiteConfig.AUTH_TOKEN(), "THIS-IS-A-FAKE-TOKEN")

    def test_default_retry_settings(self):
        self.assertEqual(SuiteConfig.MAX_RETRIES(), 1)
        self.assertEqual(SuiteConfig.RETRY_DELAY(), 1.0)

    def test_default_runner_settings(self):
        self.assertEqual(SuiteConfig.FEATURES_PATH(), "bdd")
        self.assertEqual(SuiteConfig.TIMEOUT(), 30.0)
        self.assertTrue(SuiteConfig.FULLY_PARALLEL())

    def test_default_artifact_policies(self):
        self.assertEqual(SuiteConfig.TRACE_POLICY(), "on-first-retry")
        self.assertEqual(SuiteConfig.SNAPSHOT_POLICY(), "only-on-failure")

    def test_get_dotted_path(self):
        self.assertEqual(SuiteConfig.get("report.json_dir"), "cucumber-json")
        self.assertIsNone(SuiteConfig.get("report.missing"))
        self.assertEqual(SuiteConfig.get("missing.key", 5), 5)

    def test_defaults_are_valid(self):
        self.assertEqual(SuiteConfig.validate_config(), [])


class TestConfigOverrides(BaseTestCase):
    """Config file and environment overrides"""

    def _write_config(self, data):
        with open(self.config_path, "w") as f:
            json.dump(data, f)
        SuiteConfig.reload()

    def test_file_values_merge_with_defaults(self):
        self._write_config({"api": {"max_retries": 3}})

        self.assertEqual(SuiteConfig.MAX_RETRIES(), 3)
        # untouched keys keep their defaults
        self.assertEqual(SuiteConfig.AUTH_TOKEN(), "THIS-IS-A-FAKE-TOKEN")

    def test_base_url_env_override(self):
        os.environ["API_BASE_URL"] = "http://localhost:3000"
        self.assertEqual(SuiteConfig.BASE_URL(), "http://localhost:3000")

    def test_save_config_round_trip(self):
        data = SuiteConfig._get_default_config()
        data["runner"]["timeout_seconds"] = 12

        self.assertTrue(SuiteConfig.save_config(data))
        self.assertEqual(SuiteConfig.TIMEOUT(), 12.0)

    def test_validate_reports_bad_values(self):
        self._write_config(
            {
                "api": {"base_url": "ftp://nope", "max_retries": 0},
                "runner": {"workers": 0},
                "artifacts": {"trace": "sometimes"},
            }
        )

        issues = SuiteConfig.validate_config()

        self.assertTrue(any("http" in issue for issue in issues))
        self.assertTrue(any("max_retries" in issue for issue in issues))
        self.assertTrue(any("workers" in issue for issue in issues))
        self.assertTrue(any("trace" in issue for issue in issues))


class TestEnvironmentSelection(BaseTestCase):
    """CI and local runs pick different retry and worker policies"""

    def test_local_by_default(self):
        config = get_config()
        self.assertIs(config, LocalConfig)
        self.assertEqual(config.RETRIES(), 0)
        self.assertIsNone(config.WORKERS())

    def test_ci_config(self):
        os.environ["CI"] = "true"
        config = get_config()
        self.assertIs(config, CIConfig)
        self.assertEqual(config.RETRIES(), 2)
        self.assertEqual(config.WORKERS(), 1)

    def test_ci_false_is_local(self):
        os.environ["CI"] = "false"
        self.assertIs(get_config(), LocalConfig)

"""
config/settings.py - Configuration management
"""

import os
import json
from typing import Dict, List, Any, Optional, cast

ARTIFACT_POLICIES = ("off", "on", "retain-on-failure", "only-on-failure", "on-first-retry")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


class SuiteConfig:
    """Suite configuration backed by a JSON file with built-in defaults"""

    # Load from environment or config file
    _config_data: Optional[Dict] = None

    @classmethod
    def _load_config(cls) -> Dict:
        """Load configuration from file"""
        if SuiteConfig._config_data is None:
            config_path = os.getenv("CONFIG_PATH", "config.json")
            try:
                with open(config_path, "r") as f:
                    SuiteConfig._config_data = _merge(cls._get_default_config(), json.load(f))
            except FileNotFoundError:
                SuiteConfig._config_data = cls._get_default_config()
        return SuiteConfig._config_data

    @classmethod
    def reload(cls) -> None:
        """Drop the cached configuration so the next access rereads the file"""
        SuiteConfig._config_data = None

    @classmethod
    def _get_default_config(cls) -> Dict:
        """Default configuration"""
        return {
            "api": {
                "base_url": "https://jsonplaceholder.typicode.com",
                # The remote service does not validate it
                "auth_token": "THIS-IS-A-FAKE-TOKEN",
                "request_timeout": 10,
                "max_retries": 1,
                "retry_delay_ms": 1000,
            },
            "runner": {
                "features_path": "bdd",
                "timeout_seconds": 30,
                "fully_parallel": True,
                "retries": 0,
                "ci_retries": 2,
                "workers": None,
                "ci_workers": 1,
            },
            "artifacts": {
                "output_dir": "test-results",
                "trace": "on-first-retry",
                "snapshot": "only-on-failure",
            },
            "report": {
                "json_dir": "cucumber-json",
                "html_dir": "cucumber-html-report",
                "title": "Test Execution Report",
                "project": "JSON Placeholder API Tests",
                "environment": "Test",
            },
        }

    # API target

    @classmethod
    def BASE_URL(cls) -> str:
        return os.getenv("API_BASE_URL") or cast(str, cls._load_config()["api"]["base_url"])

    @classmethod
    def AUTH_TOKEN(cls) -> str:
        return os.getenv("API_AUTH_TOKEN") or cast(str, cls._load_config()["api"]["auth_token"])

    @classmethod
    def REQUEST_TIMEOUT(cls) -> float:
        return float(cls._load_config()["api"]["request_timeout"])

    @classmethod
    def MAX_RETRIES(cls) -> int:
        return int(cls._load_config()["api"]["max_retries"])

    @classmethod
    def RETRY_DELAY(cls) -> float:
        """Delay between attempts, in seconds"""
        return int(cls._load_config()["api"]["retry_delay_ms"]) / 1000.0

    # Runner

    @classmethod
    def FEATURES_PATH(cls) -> str:
        return cast(str, cls._load_config()["runner"]["features_path"])

    @classmethod
    def TIMEOUT(cls) -> float:
        return float(cls._load_config()["runner"]["timeout_seconds"])

    @classmethod
    def FULLY_PARALLEL(cls) -> bool:
        return bool(cls._load_config()["runner"]["fully_parallel"])

    @classmethod
    def RETRIES(cls) -> int:
        return int(cls._load_config()["runner"]["retries"])

    @classmethod
    def WORKERS(cls) -> Optional[int]:
        workers = cls._load_config()["runner"]["workers"]
        return int(workers) if workers else None

    # Artifacts

    @classmethod
    def ARTIFACTS_DIR(cls) -> str:
        return cast(str, cls._load_config()["artifacts"]["output_dir"])

    @classmethod
    def TRACE_POLICY(cls) -> str:
        return cast(str, cls._load_config()["artifacts"]["trace"])

    @classmethod
    def SNAPSHOT_POLICY(cls) -> str:
        return cast(str, cls._load_config()["artifacts"]["snapshot"])

    # Report

    @classmethod
    def REPORT_JSON_DIR(cls) -> str:
        return cast(str, cls._load_config()["report"]["json_dir"])

    @classmethod
    def REPORT_HTML_DIR(cls) -> str:
        return cast(str, cls._load_config()["report"]["html_dir"])

    @classmethod
    def REPORT_TITLE(cls) -> str:
        return cast(str, cls._load_config()["report"]["title"])

    @classmethod
    def PROJECT_NAME(cls) -> str:
        return cast(str, cls._load_config()["report"]["project"])

    @classmethod
    def ENVIRONMENT_NAME(cls) -> str:
        return cast(str, cls._load_config()["report"]["environment"])

    @classmethod
    def get(cls, path: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated path"""
        keys = path.split(".")
        value = cls._load_config()

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    @classmethod
    def validate_config(cls) -> List[str]:
        """Validate configuration and return list of issues"""
        issues = []
        config = cls._load_config()

        base_url = cls.BASE_URL()
        if not base_url.startswith(("http://", "https://")):
            issues.append(f"Base URL must be http(s): {base_url!r}")

        api = config.get("api", {})
        if int(api.get("max_retries", 1)) < 1:
            issues.append("max_retries must be at least 1")
        if int(api.get("retry_delay_ms", 0)) < 0:
            issues.append("retry_delay_ms must not be negative")
        if float(api.get("request_timeout", 1)) <= 0:
            issues.append("request_timeout must be positive")

        runner = config.get("runner", {})
        if float(runner.get("timeout_seconds", 0)) < 0:
            issues.append("timeout_seconds must not be negative")
        for key in ("retries", "ci_retries"):
            if int(runner.get(key, 0)) < 0:
                issues.append(f"{key} must not be negative")
        for key in ("workers", "ci_workers"):
            workers = runner.get(key)
            if workers is not None and int(workers) < 1:
                issues.append(f"{key} must be at least 1")

        artifacts = config.get("artifacts", {})
        for key in ("trace", "snapshot"):
            policy = artifacts.get(key)
            if policy not in ARTIFACT_POLICIES:
                issues.append(f"Unknown {key} policy: {policy!r}")

        return issues

    @classmethod
    def save_config(cls, config_data: Dict) -> bool:
        """Save configuration to file"""
        config_path = os.getenv("CONFIG_PATH", "config.json")
        try:
            with open(config_path, "w") as f:
                json.dump(config_data, f, indent=2)
        except OSError:
            return False
        # Clear cached config so next access reloads from file
        cls.reload()
        return True


# Environment-specific configurations
class LocalConfig(SuiteConfig):
    """Local development: no retries, one worker per CPU"""


class CIConfig(SuiteConfig):
    """CI: retry flaky scenarios, run features one at a time"""

    @classmethod
    def RETRIES(cls) -> int:
        return int(cls._load_config()["runner"]["ci_retries"])

    @classmethod
    def WORKERS(cls) -> Optional[int]:
        workers = cls._load_config()["runner"]["ci_workers"]
        return int(workers) if workers else None


def get_config() -> type[SuiteConfig]:
    """Get configuration based on environment"""
    if _env_flag("CI"):
        return CIConfig
    return LocalConfig


def _merge(base: Dict, override: Dict) -> Dict:
    """Recursively overlay ``override`` onto ``base``"""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged

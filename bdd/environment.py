"""
BDD Test Environment Setup and Teardown

This module provides configuration and fixtures for Behave BDD tests.
It wires the per-scenario API client, scenario retries and timeouts, and
failure artifact capture.
"""

import sys
import logging
from pathlib import Path

from behave import use_fixture
from behave.contrib.scenario_autoretry import patch_scenario_with_autoretry

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from apisuite.artifacts import capture_scenario_artifacts  # noqa: E402
from apisuite.fixtures import ScenarioTimer, api_client_fixture  # noqa: E402
from config.settings import get_config  # noqa: E402


def before_all(context):
    """
    Setup before running any scenarios.

    Resolves settings once; `-D base_url=...`, `-D retries=N` and
    `-D timeout=S` override them for a single run.
    """
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    context.logger = logging.getLogger("bdd.tests")

    settings = get_config()
    userdata = context.config.userdata
    context.settings = settings
    context.base_url = userdata.get("base_url") or settings.BASE_URL()
    context.scenario_retries = userdata.getint("retries", settings.RETRIES())
    context.scenario_timeout = userdata.getfloat("timeout", settings.TIMEOUT())

    context.logger.info(
        f"BDD test suite starting against {context.base_url} "
        f"(retries={context.scenario_retries}, timeout={context.scenario_timeout:g}s)"
    )


def before_feature(context, feature):
    """Enable scenario retries for this feature when configured."""
    context.scenario_attempts = {}
    if context.scenario_retries > 0:
        for scenario in feature.walk_scenarios():
            patch_scenario_with_autoretry(
                scenario, max_attempts=context.scenario_retries + 1
            )


def before_scenario(context, scenario):
    """
    Setup before each scenario.

    Acquires a fresh authenticated API client; use_fixture registers its
    cleanup on the scenario layer so the session is always closed.
    """
    key = str(scenario.location)
    context.scenario_attempts[key] = context.scenario_attempts.get(key, 0) + 1
    context.attempt = context.scenario_attempts[key]

    suffix = f" (attempt {context.attempt})" if context.attempt > 1 else ""
    context.logger.info(f"Running scenario: {scenario.name}{suffix}")

    use_fixture(api_client_fixture, context, context.settings, base_url=context.base_url)

    context.timer = ScenarioTimer(context.scenario_timeout, scenario.name)
    context.timer.start()


def after_scenario(context, scenario):
    """
    Cleanup after each scenario.

    Stops the timer and writes trace/snapshot artifacts per policy.
    """
    timer = getattr(context, "timer", None)
    if timer is not None:
        timer.cancel()

    failed = scenario.status == "failed"
    status = "FAILED" if failed else "PASSED"
    context.logger.info(f"Scenario '{scenario.name}' {status}")

    client = getattr(context, "api_client", None)
    if client is None:
        return

    settings = context.settings
    capture_scenario_artifacts(
        settings.ARTIFACTS_DIR(),
        scenario.feature.name,
        scenario.name,
        context.attempt,
        failed,
        client.exchanges,
        settings.TRACE_POLICY(),
        settings.SNAPSHOT_POLICY(),
    )


def after_all(context):
    """
    Cleanup after all scenarios.

    This is called after all features have been run.
    """
    context.logger.info("BDD test suite completed")

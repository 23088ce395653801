"""
apisuite/artifacts.py - Diagnostic artifacts for failing scenarios

Two artifact kinds are captured from the per-scenario exchange log:
- trace: every request/response the scenario made, in order
- snapshot: the last response the scenario saw

Whether an artifact is written is decided by a capture policy, one of
ARTIFACT_POLICIES from config.settings.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from apisuite.core.exceptions import ConfigError
from config.settings import ARTIFACT_POLICIES

logger = logging.getLogger(__name__)


def should_capture(policy: str, failed: bool, attempt: int = 1) -> bool:
    """Decide whether to keep an artifact for this scenario attempt"""
    if policy not in ARTIFACT_POLICIES:
        raise ConfigError(f"Unknown artifact policy: {policy!r}")
    if policy == "off":
        return False
    if policy == "on":
        return True
    if policy == "on-first-retry":
        return attempt == 2
    # retain-on-failure / only-on-failure
    return failed


def slugify(text: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "-", text).strip("-").lower()
    return slug or "unnamed"


def artifact_path(
    output_dir: str, feature_name: str, scenario_name: str, attempt: int, kind: str
) -> Path:
    directory = Path(output_dir) / slugify(feature_name)
    return directory / f"{slugify(scenario_name)}-attempt{attempt}-{kind}.json"


def _write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)
    return path


def write_trace(
    output_dir: str,
    feature_name: str,
    scenario_name: str,
    attempt: int,
    exchanges: List[Dict[str, Any]],
    status: str,
) -> Path:
    path = artifact_path(output_dir, feature_name, scenario_name, attempt, "trace")
    return _write_json(
        path,
        {
            "feature": feature_name,
            "scenario": scenario_name,
            "attempt": attempt,
            "status": status,
            "exchanges": exchanges,
        },
    )


def write_snapshot(
    output_dir: str,
    feature_name: str,
    scenario_name: str,
    attempt: int,
    exchanges: List[Dict[str, Any]],
) -> Optional[Path]:
    """Write the last exchange, if the scenario made any request"""
    if not exchanges:
        return None
    path = artifact_path(output_dir, feature_name, scenario_name, attempt, "snapshot")
    return _write_json(path, exchanges[-1])


def capture_scenario_artifacts(
    output_dir: str,
    feature_name: str,
    scenario_name: str,
    attempt: int,
    failed: bool,
    exchanges: List[Dict[str, Any]],
    trace_policy: str,
    snapshot_policy: str,
) -> List[Path]:
    """Write whichever artifacts the policies ask for and return their paths"""
    written: List[Path] = []
    status = "failed" if failed else "passed"

    if should_capture(trace_policy, failed, attempt):
        written.append(
            write_trace(output_dir, feature_name, scenario_name, attempt, exchanges, status)
        )

    if should_capture(snapshot_policy, failed, attempt):
        snapshot = write_snapshot(output_dir, feature_name, scenario_name, attempt, exchanges)
        if snapshot is not None:
            written.append(snapshot)

    for path in written:
        logger.info(f"Saved artifact: {path}")
    return written

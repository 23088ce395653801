"""
apisuite/runner.py - Runs the behave scenarios, optionally in parallel

Parallel mode starts one behave process per feature file, bounded by the
worker count. Each process writes its own JSON result file into the report
directory for the HTML report to pick up. A failing feature never stops its
siblings.
"""

import logging
import os
import subprocess
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from apisuite.artifacts import slugify
from config.settings import SuiteConfig, get_config

logger = logging.getLogger(__name__)


@dataclass
class FeatureRun:
    target: str
    returncode: int
    duration: float
    output: str = ""

    @property
    def passed(self) -> bool:
        return self.returncode == 0


@dataclass
class SuiteResult:
    runs: List[FeatureRun] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return bool(self.runs) and all(run.passed for run in self.runs)

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    @property
    def failed(self) -> List[FeatureRun]:
        return [run for run in self.runs if not run.passed]


def discover_features(path: str) -> List[Path]:
    """Sorted list of .feature files under path (or path itself)"""
    root = Path(path)
    if root.is_file():
        return [root]
    return sorted(root.rglob("*.feature"))


def build_behave_command(
    target: str,
    json_output: Path,
    userdata: Optional[Dict[str, str]] = None,
    tags: Optional[Sequence[str]] = None,
) -> List[str]:
    command = [
        sys.executable,
        "-m",
        "behave",
        target,
        "--format",
        "json.pretty",
        "--outfile",
        str(json_output),
        "--format",
        "plain",
    ]
    for key, value in (userdata or {}).items():
        command.extend(["-D", f"{key}={value}"])
    for tag in tags or ():
        command.extend(["--tags", tag])
    return command


def clean_results(json_dir: Path) -> None:
    """Remove JSON results left over from a previous run"""
    json_dir.mkdir(parents=True, exist_ok=True)
    for stale in json_dir.glob("*.json"):
        stale.unlink()


def _run_behave(target: str, command: List[str]) -> FeatureRun:
    logger.info(f"Running {target}")
    started = time.monotonic()
    completed = subprocess.run(
        command,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    duration = time.monotonic() - started
    run = FeatureRun(target, completed.returncode, duration, completed.stdout or "")
    status = "passed" if run.passed else f"FAILED (exit {run.returncode})"
    logger.info(f"{target} {status} in {duration:.1f}s")
    return run


def run_suite(
    settings: Optional[type[SuiteConfig]] = None,
    workers: Optional[int] = None,
    parallel: Optional[bool] = None,
    tags: Optional[Sequence[str]] = None,
    retries: Optional[int] = None,
    base_url: Optional[str] = None,
) -> SuiteResult:
    """Run every feature and collect per-feature outcomes"""
    settings = settings or get_config()
    features_path = settings.FEATURES_PATH()
    json_dir = Path(settings.REPORT_JSON_DIR())
    parallel = settings.FULLY_PARALLEL() if parallel is None else parallel
    workers = workers or settings.WORKERS() or os.cpu_count() or 1

    userdata: Dict[str, str] = {}
    if retries is not None:
        userdata["retries"] = str(retries)
    if base_url:
        userdata["base_url"] = base_url

    clean_results(json_dir)

    features = discover_features(features_path)
    if not features:
        logger.warning(f"No feature files found under {features_path}")
        return SuiteResult()

    if not parallel or workers == 1 or len(features) == 1:
        command = build_behave_command(
            features_path, json_dir / "results.json", userdata, tags
        )
        return SuiteResult([_run_behave(features_path, command)])

    logger.info(f"Running {len(features)} features on {workers} workers")
    result = SuiteResult()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {}
        for feature in features:
            target = str(feature)
            output = json_dir / f"{slugify(str(feature.with_suffix('')))}.json"
            command = build_behave_command(target, output, userdata, tags)
            futures[executor.submit(_run_behave, target, command)] = target

        for future in as_completed(futures):
            result.runs.append(future.result())

    result.runs.sort(key=lambda run: run.target)
    return result

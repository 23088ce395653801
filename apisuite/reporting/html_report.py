"""
apisuite/reporting/html_report.py - HTML report from behave JSON results

Reads every JSON result file the runner wrote (behave's json formatter:
a list of features, each with scenario elements and steps) and renders a
single browsable index.html with run metadata.
"""

import json
import logging
import platform
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, BaseLoader, select_autoescape

from apisuite.core.exceptions import ReportError

logger = logging.getLogger(__name__)

STATUSES = ("passed", "failed", "skipped", "undefined", "untested")

_HTML_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
<meta name="viewport" content="width=device-width,initial-scale=1"/>
<style>
  body { font-family: system-ui, sans-serif; margin: 0; background: #f7fafc; color: #111; }
  header { background: #1f2937; color: #fff; padding: 16px 24px; }
  main { padding: 24px; max-width: 1100px; margin: 0 auto; }
  .cards { display: flex; gap: 12px; flex-wrap: wrap; margin-bottom: 24px; }
  .card { background: #fff; border-radius: 8px; padding: 12px 16px; min-width: 140px;
          box-shadow: 0 1px 2px rgba(0,0,0,.08); }
  .card b { font-size: 1.6em; display: block; }
  table { border-collapse: collapse; width: 100%; background: #fff; margin-bottom: 24px; }
  th, td { text-align: left; padding: 6px 10px; border-bottom: 1px solid #e5e7eb; vertical-align: top; }
  details { background: #fff; border-radius: 8px; margin-bottom: 8px; padding: 8px 12px; }
  summary { cursor: pointer; font-weight: 600; }
  .passed { color: #15803d; } .failed { color: #b91c1c; }
  .skipped, .untested { color: #6b7280; } .undefined, .flaky { color: #b45309; }
  pre { background: #fef2f2; padding: 8px; white-space: pre-wrap; margin: 4px 0 0; }
</style>
</head>
<body>
<header>
  <h1>{{ title }}</h1>
  <div>Generated {{ generated_at }}</div>
</header>
<main>
  <div class="cards">
    <div class="card"><b>{{ summary.features.total }}</b>features</div>
    <div class="card"><b class="passed">{{ summary.scenarios.passed }}</b>scenarios passed</div>
    <div class="card"><b class="failed">{{ summary.scenarios.failed }}</b>scenarios failed</div>
    <div class="card"><b class="flaky">{{ summary.flaky }}</b>scenarios flaky</div>
    <div class="card"><b>{{ summary.steps.total }}</b>steps</div>
    <div class="card"><b>{{ "%.2f"|format(summary.duration) }}s</b>duration</div>
  </div>

  <h2>Run information</h2>
  <table>
    {% for label, value in metadata.items() %}
    <tr><th>{{ label }}</th><td>{{ value }}</td></tr>
    {% endfor %}
    {% for item in custom_data %}
    <tr><th>{{ item.label }}</th><td>{{ item.value }}</td></tr>
    {% endfor %}
  </table>

  <h2>Features</h2>
  {% for feature in features %}
  <details {% if feature.status == "failed" %}open{% endif %}>
    <summary><span class="{{ feature.status }}">{{ feature.status|upper }}</span>
      {{ feature.name }} <small>({{ feature.location }})</small></summary>
    <table>
      <tr><th>Scenario</th><th>Status</th><th>Steps</th><th>Duration</th></tr>
      {% for scenario in feature.scenarios %}
      <tr>
        <td>{{ scenario.name }}</td>
        <td class="{{ scenario.status }}">{{ scenario.status }}
          {% if scenario.flaky %}<span class="flaky">flaky</span>{% endif %}
          {% if scenario.attempts > 1 %}<small>({{ scenario.attempts }} attempts)</small>{% endif %}
        </td>
        <td>
          {% for step in scenario.steps %}
          <div class="{{ step.status }}">{{ step.keyword }} {{ step.name }}</div>
          {% if step.error %}<pre>{{ step.error }}</pre>{% endif %}
          {% endfor %}
        </td>
        <td>{{ "%.2f"|format(scenario.duration) }}s</td>
      </tr>
      {% endfor %}
    </table>
  </details>
  {% endfor %}
</main>
</body>
</html>
"""

_env = Environment(
    loader=BaseLoader(),
    autoescape=select_autoescape(enabled_extensions=("html", "xml"), default_for_string=True),
)


def load_results(json_dir: str) -> List[Dict[str, Any]]:
    """Read every behave JSON result file in json_dir"""
    features: List[Dict[str, Any]] = []
    directory = Path(json_dir)
    if not directory.is_dir():
        return features

    for path in sorted(directory.glob("*.json")):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Skipping unreadable result file {path}: {e}")
            continue
        if isinstance(data, dict):
            data = [data]
        features.extend(item for item in data if isinstance(item, dict))

    return features


def _error_text(result: Dict[str, Any]) -> Optional[str]:
    error = result.get("error_message")
    if not error:
        return None
    if isinstance(error, list):
        return "\n".join(str(line) for line in error)
    return str(error)


def _normalize_step(step: Dict[str, Any]) -> Dict[str, Any]:
    result = step.get("result") or {}
    return {
        "keyword": step.get("keyword", ""),
        "name": step.get("name", ""),
        "status": result.get("status", "untested"),
        "duration": float(result.get("duration") or 0.0),
        "error": _error_text(result),
    }


def _scenario_status(element: Dict[str, Any], steps: List[Dict[str, Any]]) -> str:
    if element.get("status"):
        return str(element["status"])
    statuses = {step["status"] for step in steps}
    for status in ("failed", "undefined", "passed"):
        if status in statuses:
            return status
    return "skipped"


def _normalize_scenarios(elements: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    One entry per scenario, in file order.

    With scenario retries enabled behave writes an element per attempt, all
    sharing the scenario's location. The last attempt is the outcome; a
    scenario that needed more than one attempt to pass is marked flaky.
    """
    scenarios: Dict[Any, Dict[str, Any]] = {}
    for index, element in enumerate(elements):
        if element.get("type") == "background":
            continue
        steps = [_normalize_step(step) for step in element.get("steps") or []]
        status = _scenario_status(element, steps)
        key = element.get("location") or index
        previous = scenarios.get(key)
        attempts = previous["attempts"] + 1 if previous else 1
        scenarios[key] = {
            "name": element.get("name", ""),
            "status": status,
            "steps": steps,
            "duration": sum(step["duration"] for step in steps),
            "attempts": attempts,
            "flaky": attempts > 1 and status == "passed",
        }
    return list(scenarios.values())


def normalize_features(raw: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten behave's JSON into what the template renders"""
    features = []
    for feature in raw:
        scenarios = _normalize_scenarios(feature.get("elements") or [])
        status = feature.get("status")
        if not status:
            status = "failed" if any(s["status"] == "failed" for s in scenarios) else "passed"
        features.append(
            {
                "name": feature.get("name", ""),
                "location": feature.get("location", ""),
                "status": status,
                "scenarios": scenarios,
            }
        )
    return features


def summarize(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Counts by status for features, scenarios and steps"""
    feature_counts: Counter = Counter()
    scenario_counts: Counter = Counter()
    step_counts: Counter = Counter()
    duration = 0.0
    flaky = 0

    for feature in features:
        feature_counts[feature["status"]] += 1
        for scenario in feature["scenarios"]:
            scenario_counts[scenario["status"]] += 1
            flaky += 1 if scenario.get("flaky") else 0
            duration += scenario["duration"]
            for step in scenario["steps"]:
                step_counts[step["status"]] += 1

    def _block(counts: Counter) -> Dict[str, int]:
        block = {status: counts.get(status, 0) for status in STATUSES}
        block["total"] = sum(counts.values())
        return block

    return {
        "features": _block(feature_counts),
        "scenarios": _block(scenario_counts),
        "steps": _block(step_counts),
        "flaky": flaky,
        "duration": duration,
    }


def build_metadata(device: str = "Local test machine") -> Dict[str, str]:
    return {
        "Device": device,
        "Platform": f"{platform.system()} {platform.release()}".strip(),
        "Runtime": f"Python {platform.python_version()}",
    }


def build_custom_data(project: str, environment: str) -> List[Dict[str, str]]:
    return [
        {"label": "Project", "value": project},
        {"label": "Environment", "value": environment},
        {"label": "Execution Time", "value": datetime.now().strftime("%Y-%m-%d %H:%M:%S")},
    ]


def generate_report(
    json_dir: str,
    report_path: str,
    title: str = "Test Execution Report",
    metadata: Optional[Dict[str, str]] = None,
    custom_data: Optional[List[Dict[str, str]]] = None,
) -> Path:
    """
    Render the HTML report

    Returns:
        Path of the written index.html

    Raises:
        ReportError: no result files were found in json_dir
    """
    raw = load_results(json_dir)
    if not raw:
        raise ReportError(f"No behave JSON results found in {json_dir}")

    features = normalize_features(raw)
    html = _env.from_string(_HTML_TEMPLATE).render(
        title=title,
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        summary=summarize(features),
        metadata=metadata if metadata is not None else build_metadata(),
        custom_data=custom_data or [],
        features=features,
    )

    output_dir = Path(report_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    output = output_dir / "index.html"
    output.write_text(html, encoding="utf-8")
    logger.info(f"✅ HTML report → {output}")
    return output

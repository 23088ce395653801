"""
apisuite/reporting/__init__.py
HTML reporting for behave JSON results
"""

from .html_report import (
    load_results,
    normalize_features,
    summarize,
    build_metadata,
    build_custom_data,
    generate_report,
)

__all__ = [
    "load_results",
    "normalize_features",
    "summarize",
    "build_metadata",
    "build_custom_data",
    "generate_report",
]

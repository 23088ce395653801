"""
apisuite/__init__.py
JSON Placeholder API behaviour suite
"""

__version__ = "1.0.0"

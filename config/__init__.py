"""
config/__init__.py
Configuration package
"""

from .settings import SuiteConfig, LocalConfig, CIConfig, get_config, ARTIFACT_POLICIES

__all__ = ['SuiteConfig', 'LocalConfig', 'CIConfig', 'get_config', 'ARTIFACT_POLICIES']

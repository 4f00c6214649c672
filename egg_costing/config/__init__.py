"""
Configuration Management

This module provides centralized configuration management
for the egg cost engine.
"""

from .settings import Settings, AlertThresholds, AnalysisConfig, AppConfig, Environment

__all__ = [
    "Settings",
    "AlertThresholds",
    "AnalysisConfig",
    "AppConfig",
    "Environment",
]

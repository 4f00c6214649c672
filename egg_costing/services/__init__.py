"""
Services package initialization.

This module provides access to the cost engine's services and the pure
functions they are built on.
"""

from .alerts import AlertGenerator
from .breed_standards import BreedStandardProvider, ExpectedProductionProvider
from .daily_cost import DailyCostCalculator, build_daily_cost, build_daily_series
from .error_handler import ErrorHandler, get_error_handler
from .phase_analysis import PhasePartitioner, analyze_phases
from .reporting import ReportCompiler
from .snapshot_service import LotSnapshot, SnapshotService
from .statistics import StatisticsEngine, classify_trend, compute_statistics

__all__ = [
    "AlertGenerator",
    "BreedStandardProvider",
    "ExpectedProductionProvider",
    "DailyCostCalculator",
    "build_daily_cost",
    "build_daily_series",
    "ErrorHandler",
    "get_error_handler",
    "PhasePartitioner",
    "analyze_phases",
    "ReportCompiler",
    "LotSnapshot",
    "SnapshotService",
    "StatisticsEngine",
    "classify_trend",
    "compute_statistics",
]

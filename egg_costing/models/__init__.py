"""
Domain Models

This module contains the ledger records read from collaborators and the
derived cost-accounting records computed from them.
"""

# Base models
from .base import BaseModel, RecordModel, DerivedModel, DataStatus

# Ledger inputs
from .lot import Lot, LotState, RearingCosts
from .ledger import ExpenseEntry, ExpenseCategory, ProductionEntry

# Derived records
from .analytics import (
    Alert,
    AlertKind,
    AlertSeverity,
    AnalysisPeriod,
    CostTrend,
    DailyCost,
    InitialPhase,
    PerformanceStatistics,
    PhaseAnalysis,
    ProductivePhase,
)
from .report import (
    BreakEvenPoint,
    CostBreakdown,
    CostReport,
    ExecutiveSummary,
    LotRanking,
    Projections,
    RankedLot,
)

__all__ = [
    # Base models
    "BaseModel",
    "RecordModel",
    "DerivedModel",
    "DataStatus",

    # Ledger inputs
    "Lot",
    "LotState",
    "RearingCosts",
    "ExpenseEntry",
    "ExpenseCategory",
    "ProductionEntry",

    # Derived records
    "Alert",
    "AlertKind",
    "AlertSeverity",
    "AnalysisPeriod",
    "CostTrend",
    "DailyCost",
    "InitialPhase",
    "PerformanceStatistics",
    "PhaseAnalysis",
    "ProductivePhase",

    # Report
    "BreakEvenPoint",
    "CostBreakdown",
    "CostReport",
    "ExecutiveSummary",
    "LotRanking",
    "Projections",
    "RankedLot",
]

"""
Dependency Injection Container

This module wires the host application's collaborators (lot registry,
ledgers, revenue source) to the cost engine services.
"""

from datetime import date
from typing import Any, Callable, Dict, Optional

from .config.settings import Settings
from .engine import EggCostingEngine
from .repositories.base import ExpenseLedger, LotRegistry, ProductionLedger, RevenueSource
from .services.alerts import AlertGenerator
from .services.breed_standards import BreedStandardProvider, ExpectedProductionProvider
from .services.daily_cost import DailyCostCalculator
from .services.error_handler import get_error_handler
from .services.phase_analysis import PhasePartitioner
from .services.reporting import ReportCompiler
from .services.snapshot_service import SnapshotService
from .services.statistics import StatisticsEngine
from .utils.structured_logging import configure_logging


class Container:
    """Dependency injection container for the cost engine services."""

    def __init__(self):
        self._singletons: Dict[str, Any] = {}
        self._settings: Optional[Settings] = None

    def configure(
        self,
        lot_registry: LotRegistry,
        expense_ledger: ExpenseLedger,
        production_ledger: ProductionLedger,
        revenue_source: Optional[RevenueSource] = None,
        settings: Optional[Settings] = None,
        expected_production: Optional[ExpectedProductionProvider] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Configure the container with collaborators and settings."""
        self._settings = settings or Settings()
        configure_logging(self._settings.app.service_name, self._settings.app.log_level)

        self._singletons["snapshot_service"] = SnapshotService(
            lot_registry, expense_ledger, production_ledger, revenue_source, get_error_handler()
        )
        self._register_services(expected_production or BreedStandardProvider(), clock)

    def get_settings(self) -> Settings:
        """Get engine settings."""
        if not self._settings:
            self._settings = Settings()
        return self._settings

    def _register_services(self, expected_production: ExpectedProductionProvider, clock: Callable[[], date]) -> None:
        """Register service instances."""
        settings = self.get_settings()
        snapshots = self.get_snapshot_service()

        self._singletons["alert_generator"] = AlertGenerator(settings.alerts)
        self._singletons["daily_cost_calculator"] = DailyCostCalculator(snapshots, clock)
        self._singletons["phase_partitioner"] = PhasePartitioner(snapshots, clock)
        self._singletons["statistics_engine"] = StatisticsEngine(
            snapshots, self.get_alert_generator(), settings.analysis, expected_production, clock
        )
        self._singletons["report_compiler"] = ReportCompiler(
            snapshots, self.get_statistics_engine(), settings, get_error_handler(), clock
        )
        self._singletons["engine"] = EggCostingEngine(
            self.get_daily_cost_calculator(),
            self.get_phase_partitioner(),
            self.get_statistics_engine(),
            self.get_report_compiler(),
        )

    def _get(self, name: str) -> Any:
        if name not in self._singletons:
            raise RuntimeError("Container is not configured; call configure() with the collaborators first")
        return self._singletons[name]

    def get_snapshot_service(self) -> SnapshotService:
        return self._get("snapshot_service")

    def get_alert_generator(self) -> AlertGenerator:
        return self._get("alert_generator")

    def get_daily_cost_calculator(self) -> DailyCostCalculator:
        return self._get("daily_cost_calculator")

    def get_phase_partitioner(self) -> PhasePartitioner:
        return self._get("phase_partitioner")

    def get_statistics_engine(self) -> StatisticsEngine:
        return self._get("statistics_engine")

    def get_report_compiler(self) -> ReportCompiler:
        return self._get("report_compiler")

    def get_engine(self) -> EggCostingEngine:
        """Get the engine facade."""
        return self._get("engine")

    def cleanup(self) -> None:
        """Cleanup container resources."""
        self._singletons.clear()


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global container instance."""
    if _container is None:
        raise RuntimeError("Container is not configured; call configure_container() first")
    return _container


def configure_container(
    lot_registry: LotRegistry,
    expense_ledger: ExpenseLedger,
    production_ledger: ProductionLedger,
    revenue_source: Optional[RevenueSource] = None,
    settings: Optional[Settings] = None,
    **kwargs,
) -> Container:
    """Configure and return the global container."""
    global _container
    _container = Container()
    _container.configure(lot_registry, expense_ledger, production_ledger, revenue_source, settings, **kwargs)
    return _container


def cleanup_container() -> None:
    """Cleanup the global container."""
    global _container
    if _container:
        _container.cleanup()
        _container = None

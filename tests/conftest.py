"""
Pytest configuration and fixtures for the egg costing test suite
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

import pytest

from egg_costing.config.settings import Settings
from egg_costing.container import Container
from egg_costing.models import ExpenseEntry, ExpenseCategory, Lot, ProductionEntry
from egg_costing.repositories.memory import (
    InMemoryExpenseLedger,
    InMemoryLotRegistry,
    InMemoryProductionLedger,
    StaticRevenueSource,
)
from egg_costing.services.snapshot_service import LotSnapshot

TODAY = date(2024, 3, 31)
LOT_ID = "lote-1"


def fixed_clock():
    return TODAY


def make_lot(
    lot_id: str = LOT_ID,
    cantidad_inicial: int = 100,
    cantidad_actual: Optional[int] = None,
    raza: str = "",
    fecha_nacimiento: date = date(2023, 10, 1),
    fecha_inicio: date = date(2023, 10, 1),
    **kwargs,
) -> Lot:
    return Lot(
        id=lot_id,
        nombre=f"Lote {lot_id}",
        cantidad_inicial=cantidad_inicial,
        cantidad_actual=cantidad_inicial if cantidad_actual is None else cantidad_actual,
        raza=raza,
        fecha_nacimiento=fecha_nacimiento,
        fecha_inicio=fecha_inicio,
        **kwargs,
    )


def expense(fecha: date, total: str, lot_id: str = LOT_ID, categoria=ExpenseCategory.ALIMENTO) -> ExpenseEntry:
    return ExpenseEntry(lote_id=lot_id, fecha=fecha, categoria=categoria, total=Decimal(total))


def production(fecha: date, cantidad: int, lot_id: str = LOT_ID) -> ProductionEntry:
    return ProductionEntry(lote_id=lot_id, fecha=fecha, cantidad=cantidad)


def daily_production(end: date, days: int, cantidad: int, lot_id: str = LOT_ID):
    """One production entry per day for the ``days`` days ending on ``end``."""
    return [production(end - timedelta(days=i), cantidad, lot_id) for i in range(days)]


def daily_expenses(end: date, days: int, total: str, lot_id: str = LOT_ID):
    return [expense(end - timedelta(days=i), total, lot_id) for i in range(days)]


def snapshot(lot: Lot, expenses: Iterable = (), entries: Iterable = (), as_of: date = TODAY, revenue=None) -> LotSnapshot:
    return LotSnapshot.build(lot, as_of, list(expenses), list(entries), revenue)


@pytest.fixture
def test_settings():
    """Default settings, isolated from the process environment."""
    return Settings()


@pytest.fixture
def build_container(test_settings):
    """Factory wiring in-memory collaborators into a configured container."""

    def _build(
        lots: Iterable[Lot] = (),
        expenses: Iterable[ExpenseEntry] = (),
        entries: Iterable[ProductionEntry] = (),
        revenue_source=None,
        settings: Optional[Settings] = None,
        **kwargs,
    ) -> Container:
        container = Container()
        container.configure(
            InMemoryLotRegistry(lots),
            InMemoryExpenseLedger(expenses),
            InMemoryProductionLedger(entries),
            revenue_source,
            settings or test_settings,
            clock=fixed_clock,
            **kwargs,
        )
        return container

    return _build


@pytest.fixture
def producing_lot_container(build_container):
    """A lot that reared for five months and has laid 200 eggs a day for the last 30 days."""
    lot = make_lot()
    expenses = [expense(date(2023, 11, 1), "1000.00"), expense(date(2024, 2, 1), "500.00")]
    expenses += daily_expenses(TODAY, 30, "40.00")
    return build_container(
        lots=[lot],
        expenses=expenses,
        entries=daily_production(TODAY, 30, 200),
        revenue_source=StaticRevenueSource({LOT_ID: Decimal("3000.00")}),
    )

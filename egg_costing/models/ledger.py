"""
Expense and production ledger entries.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Annotated
from pydantic import Field, field_validator, model_validator

from .base import RecordModel, ZERO

Amount = Annotated[Decimal, Field(ge=0, max_digits=14, decimal_places=4)]


class ExpenseCategory(str, Enum):
    """Expense category as recorded by operators."""

    ALIMENTO = "Alimento"
    MEDICACION = "Medicacion"
    MANTENIMIENTO = "Mantenimiento"
    OTROS = "Otros"


class ExpenseEntry(RecordModel):
    """Dated expense tagged to a lot."""

    model_config = RecordModel.model_config.copy()
    model_config.update(
        json_schema_extra={
            "example": {
                "id": "gasto-001",
                "loteId": "lote-1",
                "fecha": "2024-03-01",
                "categoria": "Alimento",
                "cantidad": "2",
                "precioUnitario": "20.00",
                "total": "40.00",
                "descripcion": "Concentrado postura",
            }
        }
    )

    lote_id: str = Field(..., min_length=1)
    fecha: date
    categoria: ExpenseCategory = ExpenseCategory.OTROS
    cantidad: Amount = ZERO
    precio_unitario: Amount = ZERO
    total: Optional[Amount] = None
    descripcion: str = ""
    articulo_nombre: str = ""

    @model_validator(mode="after")
    def fill_total(self) -> "ExpenseEntry":
        # frozen model: assign through object.__setattr__
        if self.total is None:
            object.__setattr__(self, "total", self.cantidad * self.precio_unitario)
        return self


EggCount = Annotated[int, Field(ge=0)]


class ProductionEntry(RecordModel):
    """Eggs collected for a lot on one day, optionally broken down by size."""

    lote_id: str = Field(..., min_length=1)
    fecha: date
    cantidad: Optional[EggCount] = Field(default=None, description="Eggs collected that day")
    cantidad_huevos_pequenos: Optional[EggCount] = None
    cantidad_huevos_medianos: Optional[EggCount] = None
    cantidad_huevos_grandes: Optional[EggCount] = None
    cantidad_huevos_extra_grandes: Optional[EggCount] = None
    observaciones: Optional[str] = None

    @field_validator("observaciones")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @model_validator(mode="after")
    def fill_cantidad(self) -> "ProductionEntry":
        sizes = self.por_tamano
        if self.cantidad is None:
            if all(v is None for v in sizes.values()):
                raise ValueError("cantidad or a per-size egg count is required")
            object.__setattr__(self, "cantidad", sum(v or 0 for v in sizes.values()))
        return self

    @property
    def por_tamano(self) -> Dict[str, Optional[int]]:
        return {
            "pequenos": self.cantidad_huevos_pequenos,
            "medianos": self.cantidad_huevos_medianos,
            "grandes": self.cantidad_huevos_grandes,
            "extra_grandes": self.cantidad_huevos_extra_grandes,
        }

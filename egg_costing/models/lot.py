"""
Lot domain models with Pydantic v2.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Annotated
from pydantic import Field, model_validator

from .base import RecordModel, ZERO

# Type aliases
Amount = Annotated[Decimal, Field(ge=0, max_digits=14, decimal_places=4)]
BirdCount = Annotated[int, Field(ge=0)]


class LotState(str, Enum):
    """Lifecycle state of a lot as kept by the Lot Registry."""

    ACTIVO = "ACTIVO"
    FINALIZADO = "FINALIZADO"
    CANCELADO = "CANCELADO"
    VENDIDO = "VENDIDO"
    TRANSFERIDO = "TRANSFERIDO"


class RearingCosts(RecordModel):
    """Costs carried over from the rearing lot the flock was transferred from."""

    total: Amount = ZERO
    por_ave: Amount = ZERO
    fecha_inicio: Optional[date] = None
    fecha_fin: Optional[date] = None
    cantidad_inicial: BirdCount = 0
    cantidad_transferida: BirdCount = 0


class Lot(RecordModel):
    """A cohort of laying hens managed as one unit of production."""

    id: str = Field(..., min_length=1)
    nombre: str = ""
    galpon_id: Optional[str] = None
    cantidad_inicial: int = Field(..., description="Birds at lot start")
    cantidad_actual: BirdCount = 0
    raza: str = ""
    fecha_inicio: date
    fecha_nacimiento: date
    estado: LotState = LotState.ACTIVO
    costos_levante: Optional[RearingCosts] = None

    @model_validator(mode="after")
    def validate_dates(self) -> "Lot":
        if self.fecha_nacimiento > self.fecha_inicio:
            raise ValueError("fecha_nacimiento cannot be after fecha_inicio")
        return self

    @property
    def is_active(self) -> bool:
        return self.estado == LotState.ACTIVO

    @property
    def es_transferido(self) -> bool:
        return self.costos_levante is not None

    @property
    def inherited_cost(self) -> Decimal:
        return self.costos_levante.total if self.costos_levante else ZERO

    def age_in_days(self, on: date) -> int:
        return (on - self.fecha_nacimiento).days

    def age_in_weeks(self, on: date) -> int:
        return max(self.age_in_days(on), 0) // 7

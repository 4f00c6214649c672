"""
Base models and utilities for Pydantic v2.
"""
from decimal import Decimal
from typing import Any, Optional, TypeVar, Type
from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from enum import Enum

# Type variable for generic model type
ModelType = TypeVar("ModelType", bound="BaseModel")

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class BaseModel(PydanticBaseModel):
    """Base model with common configuration and methods."""

    # Pydantic v2 config
    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=False,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible types (ISO dates, camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls: Type[ModelType], data: dict) -> Optional[ModelType]:
        """Build a model from a ledger document."""
        if not data:
            return None
        return cls.model_validate(data)


class RecordModel(BaseModel):
    """Ledger record as read from a collaborator. Immutable once created."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    id: Optional[str] = Field(
        default=None,
        description="Unique identifier for the document",
        json_schema_extra={"example": "507f1f77bcf86cd799439011"},
    )


class DerivedModel(BaseModel):
    """Computed, never persisted by the engine."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
        frozen=True,
    )


class DataStatus(str, Enum):
    """Whether a derived figure could be computed."""

    OK = "OK"
    NO_DATA = "NO_DATA"

"""
Error taxonomy for the cost engine.

NOT_FOUND and INVALID_STATE abort the computation that raised them.
NO_DATA is never raised: it is encoded as ``None`` fields in the results.
UPSTREAM_UNAVAILABLE is raised by collaborator adapters and absorbed by the
report compiler, which omits the dependent section.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    NO_DATA = "NO_DATA"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


class CostingError(Exception):
    """Base class for cost engine errors."""

    code: ErrorCode = ErrorCode.INVALID_STATE

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code.value, "message": self.message, **self.context}


class LotNotFoundError(CostingError):
    code = ErrorCode.NOT_FOUND

    def __init__(self, lot_id: str):
        super().__init__(f"Lote {lot_id} no encontrado", {"lot_id": lot_id})
        self.lot_id = lot_id


class InvalidLotStateError(CostingError):
    code = ErrorCode.INVALID_STATE


class UpstreamUnavailableError(CostingError):
    code = ErrorCode.UPSTREAM_UNAVAILABLE

    def __init__(self, service: str, message: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message or f"{service} is unavailable", {"service": service, **(context or {})})
        self.service = service

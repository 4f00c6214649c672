"""
Error handling service for degraded computations.
"""

import uuid
from typing import Any, Dict, Optional

from ..exceptions import CostingError, ErrorCode
from ..utils.structured_logging import get_structured_logger

logger = get_structured_logger().get_logger(__name__)


class ErrorHandler:
    """Centralized error handling service."""

    def __init__(self):
        self.logger = logger

    def handle_exception(
        self,
        exception: Exception,
        context: Optional[str] = None,
        lot_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Log an exception and describe it for the caller."""
        error_id = self._generate_error_id()
        code = exception.code if isinstance(exception, CostingError) else None

        self.logger.error(
            "Exception occurred",
            error_id=error_id,
            error_type=type(exception).__name__,
            code=code.value if code else None,
            context=context or "unknown context",
            lot_id=lot_id,
            operation="handle_exception",
        )
        return {
            "success": False,
            "error_id": error_id,
            "code": code.value if code else None,
            "message": str(exception),
            "type": type(exception).__name__,
        }

    def handle_upstream_error(
        self,
        exception: Exception,
        service: str,
        lot_id: Optional[str] = None,
        degraded_section: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Log a collaborator failure whose dependent section will be omitted."""
        error_id = self._generate_error_id()

        self.logger.warning(
            "Upstream collaborator unavailable",
            error_id=error_id,
            error_type=type(exception).__name__,
            code=ErrorCode.UPSTREAM_UNAVAILABLE.value,
            service=service,
            lot_id=lot_id,
            degraded_section=degraded_section,
        )
        return {
            "success": False,
            "error_id": error_id,
            "code": ErrorCode.UPSTREAM_UNAVAILABLE.value,
            "message": f"{service} unavailable; {degraded_section or 'dependent section'} omitted",
            "service": service,
        }

    def _generate_error_id(self) -> str:
        return uuid.uuid4().hex[:12]


_error_handler = None


def get_error_handler() -> ErrorHandler:
    """Get global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler

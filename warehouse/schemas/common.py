"""
==============================================================================
Common Schemas Module
==============================================================================

Result value returned by every inventory service operation.

==============================================================================
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from warehouse.core.exceptions import WarehouseError


class OperationResult(BaseModel):
    """
    Outcome of one service operation.

    Attributes:
        success: True when the operation took effect
        code: Machine-readable outcome code ("OK" or an error code)
        message: Human-readable summary, one line
        data: Operation payload (product, analysis, report text, ...)
        details: Error context copied from the WarehouseError
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool = Field(default=True)
    code: str = Field(default="OK")
    message: str
    data: Optional[Any] = Field(default=None)
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "OperationResult":
        """Factory method for a successful result."""
        return cls(message=message, data=data)

    @classmethod
    def failure(cls, error: WarehouseError) -> "OperationResult":
        """Factory method converting a WarehouseError."""
        return cls(
            success=False,
            code=error.code,
            message=error.message,
            details=dict(error.details)
        )

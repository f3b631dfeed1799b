"""AvaTax sales tax integration package."""

from services.avatax.client import AvataxClient
from services.avatax.errors import AvataxError, ErrorCode
from services.avatax.service import TaxTransactionService
from services.avatax.types import AvataxConfig, TaxResult, TaxResultKind

__all__ = [
    "AvataxClient",
    "AvataxConfig",
    "AvataxError",
    "ErrorCode",
    "TaxResult",
    "TaxResultKind",
    "TaxTransactionService",
]

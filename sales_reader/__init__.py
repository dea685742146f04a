from .errors import NoCancelledSalesError, SalesParseError, SalesSourceNotFoundError
from .models import Sale, Status
from .reader import SalesReader

__all__ = [
    "NoCancelledSalesError",
    "Sale",
    "SalesParseError",
    "SalesReader",
    "SalesSourceNotFoundError",
    "Status",
]

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


class Status(str, Enum):
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    PENDING = "PENDING"

    @classmethod
    def parse(cls, raw: Any) -> "Status":
        text = str(raw).strip().upper()
        try:
            return cls(text)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown status {raw!r} (expected one of: {allowed})") from None


@dataclass(frozen=True)
class Sale:
    seller: str
    manager: str
    department: str
    payment_method: str
    status: Status
    sale_date: date
    value: Decimal

    @property
    def is_completed(self) -> bool:
        return self.status is Status.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.status is Status.CANCELLED

    def as_row(self) -> dict[str, Any]:
        return {
            "seller": self.seller,
            "manager": self.manager,
            "department": self.department,
            "payment_method": self.payment_method,
            "status": self.status.value,
            "sale_date": self.sale_date,
            "value": self.value,
        }


FIELDS = ["seller", "manager", "department", "payment_method", "status", "sale_date", "value"]

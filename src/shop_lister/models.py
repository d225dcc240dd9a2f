"""
Record types for the listed resources
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Order:
    """An order as returned by the orders collection"""
    id: int
    number: str = ""
    status: str = ""
    date_created: str = ""
    total: str = ""
    customer_id: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Order":
        return cls(
            id=payload['id'],
            number=str(payload.get('number') or payload['id']),
            status=payload.get('status') or "",
            date_created=payload.get('date_created') or "",
            total=str(payload.get('total') or ""),
            customer_id=payload.get('customer_id'),
            raw=payload
        )


@dataclass(frozen=True)
class Customer:
    """A customer as returned by the customers collection"""
    id: int
    email: str = ""
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Customer":
        return cls(
            id=payload['id'],
            email=payload.get('email') or "",
            username=payload.get('username') or "",
            first_name=payload.get('first_name') or "",
            last_name=payload.get('last_name') or "",
            raw=payload
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

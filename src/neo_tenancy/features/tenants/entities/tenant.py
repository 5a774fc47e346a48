"""Tenant domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from ....core.value_objects import TenantId


@dataclass
class Tenant:
    """Tenant domain entity.

    Attributes beyond the identifier are opaque to the resolver and kept
    in ``data``.
    """

    id: TenantId
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, **attributes: Any) -> None:
        """Merge attributes into the tenant data."""
        self.data.update(attributes)
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot suitable for JSON serialization."""
        return {
            "id": self.id.value,
            "data": self.data,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Tenant":
        """Rebuild a tenant from ``to_dict`` output."""
        return cls(
            id=TenantId(payload["id"]),
            data=payload.get("data", {}),
            created_at=datetime.fromisoformat(payload["created_at"]),
            updated_at=datetime.fromisoformat(payload["updated_at"]),
        )

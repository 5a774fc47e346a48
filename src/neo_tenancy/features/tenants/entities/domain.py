"""Domain record entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ....core.value_objects import DomainId, TenantId
from ..utils.validation import DomainValidationRules


@dataclass
class Domain:
    """Identifying domain owned by exactly one tenant."""

    id: DomainId
    domain: str
    tenant_id: TenantId
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        self.domain = DomainValidationRules.normalize(self.domain)

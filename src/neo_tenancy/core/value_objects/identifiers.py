"""Identifier value objects for tenants and their domains."""

from dataclasses import dataclass

from ...utils import generate_uuid_v7


@dataclass(frozen=True)
class TenantId:
    """Tenant identifier value object with basic validation."""
    value: str

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("Tenant ID must be a non-empty string")

    @classmethod
    def generate(cls) -> 'TenantId':
        """Generate a new TenantId using UUIDv7 for time-ordering."""
        return cls(generate_uuid_v7())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DomainId:
    """Domain record identifier value object with basic validation."""
    value: str

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("Domain ID must be a non-empty string")

    @classmethod
    def generate(cls) -> 'DomainId':
        """Generate a new DomainId using UUIDv7 for time-ordering."""
        return cls(generate_uuid_v7())

    def __str__(self) -> str:
        return self.value

"""Domain validation rules."""

import re

from ....core.exceptions import InvalidDomainError


class DomainValidationRules:
    """Normalization and validation for identifying domains."""

    DOMAIN_PATTERN = re.compile(
        r'^[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?(\.[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?)*$'
    )
    MAX_DOMAIN_LENGTH = 253

    @staticmethod
    def normalize(domain: str) -> str:
        """Lower-case and strip surrounding whitespace and the trailing root dot."""
        return domain.strip().lower().rstrip(".")

    @classmethod
    def validate(cls, domain: str) -> str:
        """Return the normalized domain or raise InvalidDomainError."""
        if not isinstance(domain, str):
            raise InvalidDomainError("Domain must be a string")

        normalized = cls.normalize(domain)
        if not normalized:
            raise InvalidDomainError("Domain cannot be empty")

        if len(normalized) > cls.MAX_DOMAIN_LENGTH:
            raise InvalidDomainError(
                f"Domain cannot exceed {cls.MAX_DOMAIN_LENGTH} characters",
                details={"domain": normalized},
            )

        if not cls.DOMAIN_PATTERN.match(normalized):
            raise InvalidDomainError(
                f"Invalid domain format: {domain}",
                details={"domain": domain},
            )

        return normalized

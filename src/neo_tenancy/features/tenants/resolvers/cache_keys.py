"""Cache key derivation for resolver entries."""

import json
from typing import Any

DEFAULT_PREFIX = "_tenancy_resolver"


class ResolverCacheKeyBuilder:
    """Derives resolver cache keys from lookup arguments.

    Keys look like ``_tenancy_resolver:domain:["acme.test"]``. Arguments are
    JSON encoded as a list, so distinct lookups never share a key even when
    they contain the separator.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX, resolver_name: str = "domain", separator: str = ":"):
        self._prefix = prefix
        self._resolver_name = resolver_name
        self._separator = separator

    @classmethod
    def from_settings(cls, settings: Any) -> "ResolverCacheKeyBuilder":
        return cls(prefix=settings.cache_key_prefix, resolver_name=settings.resolver_name)

    @property
    def prefix(self) -> str:
        return self._prefix

    def build(self, *args: Any) -> str:
        """Build a cache key from lookup arguments."""
        encoded = json.dumps(list(args), separators=(",", ":"))
        return self._separator.join((self._prefix, self._resolver_name, encoded))


def derive_cache_key(domain: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Cache key for a domain lookup with the default resolver name."""
    return ResolverCacheKeyBuilder(prefix=prefix).build(domain)

"""JSON serialization of tenant snapshots for the resolver cache.

A decoded snapshot must equal the tenant it was built from, so a cache hit
returns the same value as a store lookup. Types JSON cannot represent
(datetimes, decimals, UUIDs, sets, tuples, dicts with non-str keys) are
written as single-key tagged objects.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict
from uuid import UUID

from ....core.exceptions import CacheSerializationError
from ..entities.tenant import Tenant


def _tag(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return {"__datetime__": obj.isoformat()}
    if isinstance(obj, date):
        return {"__date__": obj.isoformat()}
    if isinstance(obj, Decimal):
        return {"__decimal__": str(obj)}
    if isinstance(obj, UUID):
        return {"__uuid__": str(obj)}
    if isinstance(obj, (set, frozenset)):
        return {"__set__": [_tag(item) for item in sorted(obj, key=repr)]}
    if isinstance(obj, tuple):
        return {"__tuple__": [_tag(item) for item in obj]}
    if isinstance(obj, list):
        return [_tag(item) for item in obj]
    if isinstance(obj, dict):
        if all(isinstance(key, str) for key in obj):
            return {key: _tag(value) for key, value in obj.items()}
        return {"__items__": [[_tag(key), _tag(value)] for key, value in obj.items()]}
    return obj


class SnapshotJSONEncoder(json.JSONEncoder):
    """JSON encoder that tags non-standard types so they round-trip."""

    def encode(self, o: Any) -> str:
        # default() never sees tuples or dict keys, so tag the whole tree first.
        return super().encode(_tag(o))

    def iterencode(self, o: Any, _one_shot: bool = False):
        return super().iterencode(_tag(o), _one_shot)


def _decode_tagged(value: Dict[str, Any]) -> Any:
    if len(value) == 1:
        tag, raw = next(iter(value.items()))
        if tag == "__datetime__":
            return datetime.fromisoformat(raw)
        if tag == "__date__":
            return date.fromisoformat(raw)
        if tag == "__decimal__":
            return Decimal(raw)
        if tag == "__uuid__":
            return UUID(raw)
        if tag == "__set__":
            return set(raw)
        if tag == "__tuple__":
            return tuple(raw)
        if tag == "__items__":
            return {key: item for key, item in raw}
    return value


class TenantSnapshotSerializer:
    """Encodes tenants to bytes and back."""

    def dumps(self, tenant: Tenant) -> bytes:
        try:
            return json.dumps(tenant.to_dict(), cls=SnapshotJSONEncoder).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to serialize tenant {tenant.id}: {e}")

    def loads(self, payload: bytes) -> Tenant:
        try:
            if isinstance(payload, bytes):
                payload = payload.decode("utf-8")
            return Tenant.from_dict(json.loads(payload, object_hook=_decode_tagged))
        except (UnicodeDecodeError, TypeError, ValueError, KeyError) as e:
            raise CacheSerializationError(f"Failed to deserialize cached tenant: {e}")

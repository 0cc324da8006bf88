"""Models for the blobs app.

StoredObject - one immutable payload held by the ObjectTable, addressed by its oid
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class StoredObject:
    oid: str
    data: bytes = field(repr=False)
    # always len(data); computed once so callers never see a stale value
    size: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'size', len(self.data))

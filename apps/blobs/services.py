import hashlib
import logging
import threading
import uuid
from typing import Dict, Optional, Protocol

from config.settings import OID_STRATEGY
from apps.blobs.models import StoredObject

logger = logging.getLogger(__name__)

OID_STRATEGIES = ('random', 'sha256')


def generate_oid(data: bytes, strategy: str = OID_STRATEGY) -> str:
    """Derive the object id for a payload.

    ``random`` ignores the content and returns a fresh uuid, so an oid is
    never handed out twice. ``sha256`` is content addressing: equal payloads
    map to the same oid.
    """
    if strategy == 'random':
        return uuid.uuid4().hex
    if strategy == 'sha256':
        return hashlib.sha256(data).hexdigest()
    raise ValueError(f'Unknown oid strategy: {strategy!r}')


class StorageInterface(Protocol):
    def put(self, repository: str, oid: str, data: bytes) -> StoredObject:
        ...

    def get(self, repository: str, oid: str) -> Optional[StoredObject]:
        ...

    def delete(self, repository: str, oid: str) -> bool:
        ...


class _Bucket:
    """Objects of a single repository behind their own lock."""

    def __init__(self):
        self.lock = threading.Lock()
        self.objects: Dict[str, StoredObject] = {}


class ObjectTable:
    """In-memory storage keyed by (repository, oid).

    Each repository gets its own bucket and lock, so traffic on one
    repository never waits on another. The table lock is only taken to
    create a bucket.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._buckets: Dict[str, _Bucket] = {}

    def _bucket(self, repository: str, create: bool = False) -> Optional[_Bucket]:
        bucket = self._buckets.get(repository)
        if bucket is None and create:
            with self._lock:
                bucket = self._buckets.setdefault(repository, _Bucket())
        return bucket

    def put(self, repository: str, oid: str, data: bytes) -> StoredObject:
        # build the object before taking the lock so readers only ever see complete entries
        obj = StoredObject(oid=oid, data=bytes(data))
        bucket = self._bucket(repository, create=True)
        with bucket.lock:
            bucket.objects[oid] = obj
        return obj

    def get(self, repository: str, oid: str) -> Optional[StoredObject]:
        bucket = self._bucket(repository)
        if bucket is None:
            return None
        with bucket.lock:
            return bucket.objects.get(oid)

    def delete(self, repository: str, oid: str) -> bool:
        bucket = self._bucket(repository)
        if bucket is None:
            return False
        with bucket.lock:
            return bucket.objects.pop(oid, None) is not None

    def count(self, repository: str) -> int:
        bucket = self._bucket(repository)
        if bucket is None:
            return 0
        with bucket.lock:
            return len(bucket.objects)

    def __len__(self) -> int:
        with self._lock:
            buckets = list(self._buckets)
        return sum(self.count(name) for name in buckets)


def save_blob(table: StorageInterface, repository: str, data: bytes, strategy: str = OID_STRATEGY) -> StoredObject:
    oid = generate_oid(data, strategy)
    obj = table.put(repository, oid, data)
    logger.debug('stored %s/%s (%d bytes)', repository, oid, obj.size)
    return obj


def get_blob(table: StorageInterface, repository: str, oid: str) -> Optional[bytes]:
    obj = table.get(repository, oid)
    if obj is None:
        return None
    return obj.data


def remove_blob(table: StorageInterface, repository: str, oid: str) -> bool:
    removed = table.delete(repository, oid)
    if removed:
        logger.debug('deleted %s/%s', repository, oid)
    return removed

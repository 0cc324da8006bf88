from typing import Optional

import httpx

from apps.blobs.schema import BlobCreated


class BlobClientError(RuntimeError):
    pass


class BlobClient:
    """Async HTTP client for the /data endpoints of a single repository.

    Usage:
        async with BlobClient('http://localhost:8282', 'codingtest') as client:
            created = await client.put(b'something')
            data = await client.get(created.oid)
            await client.delete(created.oid)
    """

    def __init__(self, base_url: str, repository: str, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip('/')
        self.repository = repository
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False

    async def aclose(self) -> None:
        await self._client.aclose()

    def _path(self, oid: str = '') -> str:
        if oid:
            return f'/data/{self.repository}/{oid}'
        return f'/data/{self.repository}'

    async def put(self, data: bytes) -> BlobCreated:
        resp = await self._client.put(self._path(), content=data)
        if resp.status_code != 201:
            raise BlobClientError(f'PUT failed: {resp.status_code} {resp.text}')
        content_type = resp.headers.get('content-type', '')
        if content_type != 'application/json':
            raise BlobClientError(f'PUT returned unexpected content type {content_type!r}')
        return BlobCreated.model_validate(resp.json())

    async def get(self, oid: str) -> Optional[bytes]:
        resp = await self._client.get(self._path(oid))
        if resp.status_code == 200:
            return resp.content
        if resp.status_code == 404:
            return None
        raise BlobClientError(f'GET failed: {resp.status_code} {resp.text}')

    async def delete(self, oid: str) -> bool:
        resp = await self._client.delete(self._path(oid))
        if resp.status_code == 200:
            return True
        if resp.status_code == 404:
            return False
        raise BlobClientError(f'DELETE failed: {resp.status_code} {resp.text}')

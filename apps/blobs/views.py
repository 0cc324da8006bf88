import logging

from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from apps.blobs.schema import BlobCreated, ParsedPath, PathKind
from apps.blobs.services import ObjectTable, get_blob, remove_blob, save_blob

logger = logging.getLogger(__name__)


def _require_object_id(parsed: ParsedPath) -> None:
    if parsed.kind is not PathKind.OBJECT:
        raise HTTPException(status_code=400, detail='Missing object id')


async def create_blob(request: Request, parsed: ParsedPath, table: ObjectTable):
    if parsed.kind is not PathKind.REPOSITORY:
        raise HTTPException(status_code=400, detail='Object ids are assigned by the server')
    # the whole body is read before the table is touched
    try:
        data = await request.body()
    except ClientDisconnect as exc:
        logger.error('Error reading upload for repository %s: %s', parsed.repository, exc)
        raise HTTPException(status_code=500, detail='Error reading request body') from exc
    obj = save_blob(table, parsed.repository, data, request.app.state.settings.oid_strategy)
    body = BlobCreated(oid=obj.oid, size=obj.size)
    return JSONResponse(status_code=201, content=body.model_dump())


async def retrieve_blob(request: Request, parsed: ParsedPath, table: ObjectTable):
    _require_object_id(parsed)
    data = get_blob(table, parsed.repository, parsed.object_id)
    if data is None:
        raise HTTPException(status_code=404, detail='Object not found')
    return Response(content=data, media_type='application/octet-stream')


async def delete_blob(request: Request, parsed: ParsedPath, table: ObjectTable):
    _require_object_id(parsed)
    if not remove_blob(table, parsed.repository, parsed.object_id):
        raise HTTPException(status_code=404, detail='Object not found')
    return Response(status_code=200)

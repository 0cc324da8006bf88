
# blobs/routers.py
from fastapi import APIRouter, Depends, HTTPException, Request

from apps.blobs.schema import ParsedPath, PathKind
from apps.blobs.services import ObjectTable
from .views import create_blob, delete_blob, retrieve_blob

HANDLERS = {
    'PUT': create_blob,
    'GET': retrieve_blob,
    'DELETE': delete_blob,
}
ALLOW = ', '.join(sorted(HANDLERS))
# accepted so that unsupported methods get a 405 from us instead of a 404/405 from routing
ROUTE_METHODS = ['GET', 'PUT', 'DELETE', 'POST', 'PATCH', 'HEAD', 'OPTIONS']

router = APIRouter()


def parse_path(path: str) -> ParsedPath:
    """Split what follows ``/data/`` into repository and object id.

    Accepts ``repo``, ``repo/`` and ``repo/oid``; anything else is malformed.
    """
    segments = path.split('/')
    if len(segments) > 2 or not segments[0]:
        return ParsedPath(kind=PathKind.MALFORMED)
    repository = segments[0]
    object_id = segments[1] if len(segments) == 2 else ''
    if not object_id:
        return ParsedPath(kind=PathKind.REPOSITORY, repository=repository)
    return ParsedPath(kind=PathKind.OBJECT, repository=repository, object_id=object_id)


def get_object_table(request: Request) -> ObjectTable:
    return request.app.state.object_table


async def dispatch(request: Request, path: str, table: ObjectTable = Depends(get_object_table)):
    parsed = parse_path(path)
    if parsed.kind is PathKind.MALFORMED:
        raise HTTPException(status_code=400, detail='Expected /data/{repository}[/{objectID}]')
    handler = HANDLERS.get(request.method)
    if handler is None:
        raise HTTPException(status_code=405, detail='Method not allowed', headers={'Allow': ALLOW})
    return await handler(request, parsed, table)


@router.api_route('/data', methods=ROUTE_METHODS, include_in_schema=False)
async def missing_repository():
    raise HTTPException(status_code=400, detail='Missing repository')


router.api_route('/data/{path:path}', methods=ROUTE_METHODS)(dispatch)

from enum import Enum

from pydantic import BaseModel, Field


class BlobCreated(BaseModel):
    oid: str = Field(..., min_length=1)
    size: int = Field(..., ge=0)


class PathKind(str, Enum):
    REPOSITORY = 'repository'
    OBJECT = 'object'
    MALFORMED = 'malformed'


class ParsedPath(BaseModel):
    kind: PathKind
    repository: str = ''
    object_id: str = ''

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str | None = None


class PostAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    content: str | None = None
    organization_id: uuid.UUID
    author_id: uuid.UUID | None = None
    author: PostAuthor | None = None
    created_at: datetime
    updated_at: datetime

"""Post API router: tenant-scoped content."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.modules.post.schemas import PostCreate, PostResponse
from src.modules.post.service import PostService
from src.modules.tenancy.dependencies import get_tenant_context
from src.modules.tenancy.schemas import TenantContext
from src.schemas.responses import error_responses

router = APIRouter(prefix="/posts", tags=["posts"], responses=error_responses(401, 404, 500))


@router.get("", response_model=list[PostResponse])
async def list_posts(
    ctx: TenantContext = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    """List the posts of the caller's organization, newest first."""
    return await PostService(db).list_posts(ctx)


@router.post("", response_model=PostResponse, status_code=201, responses=error_responses(400))
async def create_post(
    body: PostCreate,
    ctx: TenantContext = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    """Create a post in the caller's organization."""
    post = await PostService(db).create_post(ctx, title=body.title, content=body.content)
    await db.commit()
    return post

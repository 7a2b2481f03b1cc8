"""Tenant-scoped post service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.models.post import Post
from src.modules.tenancy.schemas import TenantContext

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_post(self, ctx: TenantContext, title: str, content: str | None = None) -> Post:
        """Create a post owned by the caller's organization and authored by the caller."""
        post = Post(
            title=title,
            content=content,
            organization_id=ctx.organization_id,
            author=ctx.principal,
        )
        self.db.add(post)
        await self.db.flush()
        logger.info("Post %s created in organization %s", post.id, ctx.organization_id)
        return post

    async def list_posts(self, ctx: TenantContext) -> list[Post]:
        result = await self.db.execute(
            select(Post)
            .options(joinedload(Post.author))
            .where(Post.organization_id == ctx.organization_id)
            .order_by(Post.created_at.desc())
        )
        return list(result.unique().scalars().all())

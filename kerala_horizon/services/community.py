"""
Community posts shared by travellers.
"""
import logging
from typing import Optional

from ..core.errors import NotFoundError
from ..models.places import CommunityPost, PostCreate
from ..models.user import UserProfile
from . import catalog
from .store import Database, db

logger = logging.getLogger(__name__)


class CommunityService:
    def __init__(self, database: Database = db):
        self.posts = database.collection("community")

    def _seed(self):
        """Put the starter posts in place the first time the board is read."""
        if self.posts.count() == 0:
            for post in catalog.seed_posts():
                self.posts.set(post.id, post)

    def list_posts(self, category: Optional[str] = None, limit: int = 20, offset: int = 0) -> tuple[list[CommunityPost], dict]:
        self._seed()
        posts = sorted(self.posts.all(), key=lambda p: p.created_at, reverse=True)
        if category and category != "all":
            posts = [p for p in posts if p.category == category]
        total = len(posts)
        return posts[offset:offset + limit], {
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": total > offset + limit,
        }

    def create_post(self, author: UserProfile, data: PostCreate) -> CommunityPost:
        self._seed()
        post = CommunityPost(author_id=author.uid, author=author.name, **data.model_dump())
        self.posts.add(post.id, post)
        logger.info(f"Community post {post.id} created by {author.uid}")
        return post

    def toggle_like(self, user_id: str, post_id: str) -> tuple[CommunityPost, bool]:
        """Like the post, or remove the like if the user already liked it."""
        self._seed()
        post = self.posts.get(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if user_id in post.liked_by:
            updated = self.posts.update(
                post_id,
                liked_by=[u for u in post.liked_by if u != user_id],
                likes=max(post.likes - 1, 0),
            )
            return updated, False
        updated = self.posts.update(post_id, liked_by=[*post.liked_by, user_id], likes=post.likes + 1)
        return updated, True


community_service = CommunityService()


def get_community_service() -> CommunityService:
    return community_service

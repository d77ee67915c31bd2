"""
Community board routes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..models.places import PostCreate
from ..models.user import UserProfile
from ..services.community import get_community_service
from .deps import get_current_user, ok

router = APIRouter(prefix="/api/community", tags=["community"])


@router.get("/posts")
async def list_posts(
    category: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    posts, pagination = get_community_service().list_posts(category, limit, offset)
    return ok({"posts": [p.public_dict() for p in posts], "pagination": pagination})


@router.post("/posts", status_code=201)
async def create_post(post: PostCreate, user: UserProfile = Depends(get_current_user)):
    created = get_community_service().create_post(user, post)
    return ok({"post": created.public_dict()}, message="Post created successfully")


@router.post("/posts/{post_id}/like")
async def like_post(post_id: str, user: UserProfile = Depends(get_current_user)):
    """Like a post, or take the like back."""
    post, liked = get_community_service().toggle_like(user.uid, post_id)
    return ok({"post_id": post.id, "likes": post.likes, "liked": liked})

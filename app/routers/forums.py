from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from ..database import get_db
from ..models.user import User
from ..services.forum_service import ForumService
from ..schemas.common import PaginationParams
from ..schemas.forum import (
    ForumPostCreate,
    ForumReplyCreate,
    ForumPostUpdate,
    ForumPostResponse,
    ForumThreadResponse,
)
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.pagination import pagination_params
from ..dependencies.permissions import get_current_user, get_optional_user

router = APIRouter(tags=["forums"])


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_forum_post(
    post_data: ForumPostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    post = ForumService(db).create_post(post_data, current_user)

    return RouterResponse.created(
        data={"post": ForumPostResponse.model_validate(post)},
        message="Forum post created successfully",
    )


@router.get("/event/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_event_forum_posts(
    event_id: int,
    pagination: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Top-level posts of an event with their reply counts"""
    page = ForumService(db).get_event_posts(event_id, current_user, pagination)

    return RouterResponse.success(
        data={
            "posts": [ForumPostResponse.model_validate(p) for p in page.items],
            "pagination": page.pagination,
        },
        message="Forum posts retrieved successfully",
    )


@router.get("/my-posts", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_forum_posts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    posts = ForumService(db).get_user_posts(current_user)

    return RouterResponse.success(
        data={"posts": [ForumPostResponse.model_validate(p) for p in posts]},
        message="Your forum posts retrieved successfully",
    )


@router.get("/{post_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_forum_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """A post with its full reply tree"""
    post = ForumService(db).get_post(post_id, current_user)

    return RouterResponse.success(
        data={"post": ForumThreadResponse.model_validate(post)},
        message="Forum post retrieved successfully",
    )


@router.post("/{post_id}/reply", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def reply_to_forum_post(
    post_id: int,
    reply_data: ForumReplyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reply = ForumService(db).reply(post_id, reply_data, current_user)

    return RouterResponse.created(
        data={"post": ForumPostResponse.model_validate(reply)},
        message="Reply created successfully",
    )


@router.put("/{post_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_forum_post(
    post_id: int,
    post_data: ForumPostUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    post = ForumService(db).update_post(post_id, post_data, current_user)

    return RouterResponse.updated(
        data={"post": ForumPostResponse.model_validate(post)},
        message="Forum post updated successfully",
    )


@router.delete("/{post_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_forum_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ForumService(db).delete_post(post_id, current_user)

    return RouterResponse.deleted(message="Forum post deleted successfully")

"""Post-related endpoints for the Setlist Board API."""

from typing import Literal

from fastapi import APIRouter, Query, status

from setlist_board.api.v1.dependencies import CurrentUserDep, OptionalUserDep, ServicesDep
from setlist_board.schemas.common import SuccessResponse
from setlist_board.schemas.post import (
    FeedResponse,
    PostCreate,
    PostDelete,
    PostResponse,
    PostUpdate,
    ThreadResponse,
)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=FeedResponse)
def get_feed(
    services: ServicesDep,
    viewer: OptionalUserDep,
    sort: Literal["chronological", "hot"] = Query("chronological"),
    cursor: str | None = Query(None, description="next_cursor from the previous page"),
    limit: int | None = Query(None, description="Clamped to 1-100, default 20"),
) -> FeedResponse:
    """Get a page of top-level posts."""
    page = services.posts.get_feed(
        sort=sort,
        cursor=cursor,
        limit=limit,
        viewer_id=viewer.id if viewer else None,
    )
    return FeedResponse(
        posts=[PostResponse.from_view(item) for item in page.items],
        next_cursor=page.next_cursor,
    )


@router.get("/{post_id}", response_model=ThreadResponse)
def get_thread(
    post_id: str,
    services: ServicesDep,
    viewer: OptionalUserDep,
) -> ThreadResponse:
    """Get a post together with its replies."""
    thread = services.posts.get_thread(post_id, viewer_id=viewer.id if viewer else None)
    return ThreadResponse(
        post=PostResponse.from_view(thread.post),
        replies=[PostResponse.from_view(reply) for reply in thread.replies],
    )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> PostResponse:
    """Create a post, a reply (``parent_id``) or a quote (``quoted_post_id``)."""
    media = {"media_url": post_data.media_url, "media_type": post_data.media_type}
    if post_data.parent_id:
        post = services.posts.reply_to_post(
            post_data.parent_id, current_user.id, post_data.content, **media
        )
    elif post_data.quoted_post_id:
        post = services.posts.quote_post(
            post_data.quoted_post_id, current_user.id, post_data.content, **media
        )
    else:
        post = services.posts.create_post(current_user.id, post_data.content, **media)
    return PostResponse.from_view(services.posts.view(post, current_user.id))


@router.patch("", response_model=PostResponse)
def edit_post(
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> PostResponse:
    """Edit the content of one of your own posts."""
    post = services.posts.edit_post(post_data.post_id, current_user.id, post_data.content)
    return PostResponse.from_view(services.posts.view(post, current_user.id))


@router.delete("", response_model=SuccessResponse)
def delete_post(
    post_data: PostDelete,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> SuccessResponse:
    """Soft-delete one of your own posts."""
    services.posts.delete_post(post_data.post_id, current_user.id)
    return SuccessResponse()

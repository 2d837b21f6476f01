"""Moderation-related endpoints for the Setlist Board API."""

from fastapi import APIRouter, Query, status

from setlist_board.api.v1.dependencies import CurrentUserDep, ModeratorDep, ServicesDep
from setlist_board.schemas.moderation import FlagCreate, FlagResponse, FlagReview
from setlist_board.schemas.post import PostResponse

router = APIRouter(prefix="/flags", tags=["moderation"])


@router.post("", response_model=FlagResponse, status_code=status.HTTP_201_CREATED)
def flag_post(
    flag_data: FlagCreate,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> FlagResponse:
    """Report a post."""
    flag = services.moderation.flag_post(
        flag_data.post_id,
        current_user.id,
        flag_data.reason,
        flag_data.description,
    )
    return FlagResponse.from_flag(flag)


@router.get("/pending", response_model=list[FlagResponse])
def get_pending_flags(
    moderator: ModeratorDep,
    services: ServicesDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[FlagResponse]:
    """Get the review queue, newest first."""
    flags = services.moderation.get_pending_flags(limit=limit, offset=offset)
    return [FlagResponse.from_flag(flag) for flag in flags]


@router.get("/post/{post_id}", response_model=list[FlagResponse])
def get_flags_for_post(
    post_id: str,
    moderator: ModeratorDep,
    services: ServicesDep,
) -> list[FlagResponse]:
    """Get every flag raised against a post."""
    return [FlagResponse.from_flag(flag) for flag in services.moderation.get_flags_for_post(post_id)]


@router.post("/{flag_id}/review", response_model=FlagResponse)
def review_flag(
    flag_id: str,
    review: FlagReview,
    moderator: ModeratorDep,
    services: ServicesDep,
) -> FlagResponse:
    """Dismiss a flag, or action it by hiding or removing the post."""
    flag = services.moderation.review_flag(flag_id, review.action, moderator.id)
    return FlagResponse.from_flag(flag)


@router.post("/hide/{post_id}", response_model=PostResponse)
def hide_post(
    post_id: str,
    moderator: ModeratorDep,
    services: ServicesDep,
) -> PostResponse:
    """Hide a post without waiting for a flag."""
    post = services.moderation.hide_post(post_id, moderator.id)
    return PostResponse.from_view(services.posts.view(post, moderator.id))


@router.post("/remove/{post_id}", response_model=PostResponse)
def remove_post(
    post_id: str,
    moderator: ModeratorDep,
    services: ServicesDep,
) -> PostResponse:
    """Take a post down for good; only a restore brings it back."""
    post = services.moderation.remove_post(post_id, moderator.id)
    return PostResponse.from_view(services.posts.view(post, moderator.id))


@router.post("/restore/{post_id}", response_model=PostResponse)
def restore_post(
    post_id: str,
    moderator: ModeratorDep,
    services: ServicesDep,
) -> PostResponse:
    """Return a hidden or removed post to the feed."""
    post = services.moderation.restore_post(post_id, moderator.id)
    return PostResponse.from_view(services.posts.view(post, moderator.id))

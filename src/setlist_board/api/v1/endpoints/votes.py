"""Vote-related endpoints for the Setlist Board API."""

from fastapi import APIRouter

from setlist_board.api.v1.dependencies import CurrentUserDep, ServicesDep
from setlist_board.schemas.vote import VoteCreate, VoteResponse

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", response_model=VoteResponse)
def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> VoteResponse:
    """Toggle a vote; repeating the same vote removes it."""
    result = services.votes.toggle_vote(vote_data.post_id, current_user.id, vote_data.vote_type)
    return VoteResponse(
        action="added" if result.vote_type is not None else "removed",
        vote_type=result.vote_type,
        upvote_count=result.upvote_count,
        downvote_count=result.downvote_count,
        vote_score=result.vote_score,
    )


@router.get("/{post_id}/my-vote")
def get_my_vote(
    post_id: str,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> dict[str, str | None]:
    """Get current user's vote on a specific post."""
    return {"vote_type": services.votes.get_user_vote(post_id, current_user.id)}

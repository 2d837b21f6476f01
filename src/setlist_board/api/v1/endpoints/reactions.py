"""Reaction endpoints for the Setlist Board API."""

from fastapi import APIRouter

from setlist_board.api.v1.dependencies import CurrentUserDep, ServicesDep
from setlist_board.schemas.reaction import ReactionCount, ReactionCreate, ReactionResponse

router = APIRouter(prefix="/reactions", tags=["reactions"])


@router.post("", response_model=ReactionResponse)
def toggle_reaction(
    reaction_data: ReactionCreate,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> ReactionResponse:
    """Add an emoji reaction, or remove it if already present."""
    action, count = services.reactions.toggle_reaction(
        reaction_data.post_id, current_user.id, reaction_data.emoji_code
    )
    return ReactionResponse(action=action, reaction_count=count)


@router.get("/{post_id}", response_model=list[ReactionCount])
def get_reactions(post_id: str, services: ServicesDep) -> list[ReactionCount]:
    return [
        ReactionCount(emoji_code=emoji, count=count)
        for emoji, count in services.reactions.get_reaction_summary(post_id)
    ]

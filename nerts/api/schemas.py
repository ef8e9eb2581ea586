"""
Pydantic Schemas - Request/response models for clients of the engine.

Snapshots are read-only projections of GameState for renderers: scores,
the finished flag, the winner, and per-pile card counts. Face-down
cards are projected without their rank and suit.

Error Codes:
- GAME_NOT_FOUND: Game id does not exist or has ended
- PLAYER_NOT_FOUND: Player id is not seated in the game
- NOT_A_BOT: Bot step requested for a human seat
- VALIDATION_ERROR: Request failed validation
"""

from enum import Enum
from typing import Optional, Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..config import NertsRules
from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.state import FoundationPile, GameState, NertsCard, PlayerState


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    NOT_A_BOT = "NOT_A_BOT"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Snapshot Models
# =============================================================================

class CardView(BaseModel):
    """A card as a renderer may see it."""
    card_id: str
    owner_id: str
    face_up: bool
    rank: Optional[str] = None
    suit: Optional[str] = None

    @classmethod
    def from_card(cls, card: NertsCard) -> "CardView":
        return cls(
            card_id=card.card_id,
            owner_id=card.owner_id,
            face_up=card.face_up,
            rank=card.rank.value if card.face_up else None,
            suit=card.suit.value if card.face_up else None,
        )


def _view(card: Optional[NertsCard]) -> Optional[CardView]:
    return CardView.from_card(card) if card is not None else None


class PlayerView(BaseModel):
    """One player's piles and score."""
    player_id: str
    is_bot: bool = False
    score: int = 0
    nerts_count: int = 0
    nerts_top: Optional[CardView] = None
    tableau: list[list[CardView]] = Field(default_factory=list)
    stock_count: int = 0
    waste_count: int = 0
    waste_top: Optional[CardView] = None
    is_winner: bool = False

    @classmethod
    def from_player(cls, player: PlayerState, is_bot: bool, winner_id: Optional[str]) -> "PlayerView":
        return cls(
            player_id=player.player_id,
            is_bot=is_bot,
            score=player.score,
            nerts_count=len(player.nerts_pile),
            nerts_top=_view(player.nerts_top),
            tableau=[[CardView.from_card(c) for c in column] for column in player.tableau],
            stock_count=len(player.stock),
            waste_count=len(player.waste),
            waste_top=_view(player.waste_top),
            is_winner=player.player_id == winner_id,
        )


class FoundationView(BaseModel):
    """A shared foundation slot."""
    index: int
    suit: Optional[str] = None
    card_count: int = 0
    top_card: Optional[CardView] = None

    @classmethod
    def from_pile(cls, index: int, pile: FoundationPile) -> "FoundationView":
        return cls(
            index=index,
            suit=pile.suit.value if pile.suit is not None else None,
            card_count=len(pile.cards),
            top_card=_view(pile.top_card),
        )


class GameSnapshot(BaseModel):
    """Complete read-only view of a game."""
    game_id: str
    finished: bool
    winner_id: Optional[str] = None
    started_at: float = 0.0
    players: list[PlayerView] = Field(default_factory=list)
    foundations: list[FoundationView] = Field(default_factory=list)
    total_cards: int = 0

    @classmethod
    def from_state(cls, state: GameState, bot_ids: Optional[set[str]] = None) -> "GameSnapshot":
        bot_ids = bot_ids or set()
        return cls(
            game_id=state.game_id,
            finished=state.finished,
            winner_id=state.winner_id,
            started_at=state.started_at,
            players=[
                PlayerView.from_player(p, p.player_id in bot_ids, state.winner_id)
                for p in state.players
            ],
            foundations=[
                FoundationView.from_pile(idx, pile) for idx, pile in enumerate(state.foundations)
            ],
            total_cards=state.total_cards(),
        )


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to deal a new game."""
    player_ids: list[str] = Field(min_length=1, description="Seats, in order")
    bot_ids: list[str] = Field(default_factory=list, description="Seats played by bots")
    seed: Optional[int] = Field(None, description="Seed for a reproducible deal")
    rules: Optional[NertsRules] = None

    @field_validator("player_ids")
    @classmethod
    def _unique_players(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("player_ids must be unique")
        if any(not pid for pid in v):
            raise ValueError("player_ids must be non-empty strings")
        return v

    @model_validator(mode="after")
    def _bots_are_seated(self) -> "CreateGameRequest":
        unknown = [pid for pid in self.bot_ids if pid not in self.player_ids]
        if unknown:
            raise ValueError(f"bot_ids not in player_ids: {unknown}")
        return self


class ActionRequest(BaseModel):
    """A player move, as submitted by a client."""
    action_type: ActionType
    player_id: str
    tableau_index: Optional[int] = None
    foundation_index: Optional[int] = None
    from_index: Optional[int] = None
    to_index: Optional[int] = None
    card_id: Optional[str] = None

    def to_action(self) -> Action:
        return Action(
            action_type=self.action_type,
            payload=ActionPayload(
                player_id=self.player_id,
                tableau_index=self.tableau_index,
                foundation_index=self.foundation_index,
                from_index=self.from_index,
                to_index=self.to_index,
                card_id=self.card_id,
            ),
        )


class RunBotsRequest(BaseModel):
    """Play the bots for a number of ticks."""
    max_ticks: int = Field(100, ge=1)
    skill: float = Field(1.0, ge=0.0, le=1.0, description="Chance each bot acts per tick")
    seed: Optional[int] = None


# =============================================================================
# Response Models
# =============================================================================

class ActionResponse(BaseModel):
    """Outcome of one submitted action."""
    game_id: str
    accepted: bool
    reason: Optional[str] = None
    score_delta: int = 0
    changes: list[str] = Field(default_factory=list)
    snapshot: GameSnapshot


class RunBotsResponse(BaseModel):
    """Outcome of a bot run."""
    game_id: str
    ticks: int
    actions_applied: int
    finished: bool
    winner_id: Optional[str] = None
    scores: dict[str, int] = Field(default_factory=dict)
    snapshot: GameSnapshot


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None

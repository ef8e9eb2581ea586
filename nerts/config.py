"""
Configuration - House rules and engine settings.

NertsRules holds the table rules (pile sizes, draw count, scoring).
EngineSettings holds runtime knobs read from the environment:

    NERTS_LOG_LEVEL   Logging level for the CLI (default WARNING)
    NERTS_BOT_SKILL   Chance a bot acts on each loop tick (default 0.6)
    NERTS_MAX_TICKS   Safety cap for bot-only games (default 2000)
"""

from __future__ import annotations
import os

from pydantic import BaseModel, Field, model_validator

DECK_SIZE = 52


class NertsRules(BaseModel):
    """Table rules for a Nerts game."""
    nerts_pile_size: int = Field(13, ge=1)
    tableau_columns: int = Field(4, ge=1)
    draw_count: int = Field(3, ge=1)
    foundations_per_player: int = Field(4, ge=1)

    # Points per card played to a foundation, by source pile
    waste_to_foundation_points: int = Field(1, ge=0)
    tableau_to_foundation_points: int = Field(1, ge=0)
    nerts_to_foundation_points: int = Field(2, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _fits_in_one_deck(self) -> NertsRules:
        if self.nerts_pile_size + self.tableau_columns > DECK_SIZE:
            raise ValueError(
                f"Nerts pile ({self.nerts_pile_size}) and tableau "
                f"({self.tableau_columns}) do not fit in a {DECK_SIZE}-card deck"
            )
        return self


DEFAULT_RULES = NertsRules()


class EngineSettings(BaseModel):
    """Runtime settings, usually loaded with from_env()."""
    log_level: str = "WARNING"
    bot_skill: float = Field(0.6, ge=0.0, le=1.0)
    max_ticks: int = Field(2000, ge=1)

    @classmethod
    def from_env(cls) -> EngineSettings:
        return cls(
            log_level=os.getenv("NERTS_LOG_LEVEL", "WARNING").upper(),
            bot_skill=float(os.getenv("NERTS_BOT_SKILL", "0.6")),
            max_ticks=int(os.getenv("NERTS_MAX_TICKS", "2000")),
        )

"""
API Module - Client-facing interface to the engine.

Exposes games as pydantic snapshots and accepts moves as pydantic
requests. Transport is left to the caller.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    ActionRequest,
    RunBotsRequest,
    # Responses
    GameSnapshot,
    ActionResponse,
    RunBotsResponse,
    ErrorResponse,
    ErrorCode,
    # Shared
    CardView,
    PlayerView,
    FoundationView,
)
from .service import NertsService

__all__ = [
    # Requests
    "CreateGameRequest",
    "ActionRequest",
    "RunBotsRequest",
    # Responses
    "GameSnapshot",
    "ActionResponse",
    "RunBotsResponse",
    "ErrorResponse",
    "ErrorCode",
    # Shared
    "CardView",
    "PlayerView",
    "FoundationView",
    # Service
    "NertsService",
]

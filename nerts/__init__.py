"""
Nerts - Multiplayer Patience Engine

A deterministic, rules-driven engine for Nerts, the racing solitaire
where every player builds on the same foundations. Provides:
- Card/deck primitives
- State management and a pure reducer
- Legal action generation
- Bot policies
- Sessions that serialize human and bot moves
"""

__version__ = "0.1.0"

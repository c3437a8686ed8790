"""
Montecarlo Core Package

This package contains what the search engine needs to know about games:
- The GameState capability contract
- The error taxonomy shared by games and the engine

All core components can be imported directly from this package.
"""

# Game contract
from montecarlo.core.state import GameState, PlayerT, ActionT

# Errors
from montecarlo.core.errors import (
    MonteCarloError, IllegalActionError,
    PrematureResultError, EmptySelectionError
)

__all__ = [
    # Contract
    'GameState', 'PlayerT', 'ActionT',

    # Errors
    'MonteCarloError', 'IllegalActionError',
    'PrematureResultError', 'EmptySelectionError'
]

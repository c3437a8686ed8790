"""
Exceptions raised by game adapters and the search engine.

All of these signal contract violations by the caller (or a bug in the
engine); none of them is transient, so nothing in the package retries or
recovers from them.
"""


class MonteCarloError(Exception):
    """Base class for errors raised by this package."""


class IllegalActionError(MonteCarloError, ValueError):
    """Raised when an action is applied that is not in the legal-action set."""


class PrematureResultError(MonteCarloError, RuntimeError):
    """Raised when a result is requested before the game has ended."""


class EmptySelectionError(MonteCarloError, AssertionError):
    """Raised when child selection is attempted on a node without children."""

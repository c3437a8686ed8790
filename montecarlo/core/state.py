"""
The capability set a game must expose to be searched.

Any object providing these five methods can be handed to the search engine;
there is no base class to inherit from. Actions must be hashable and compare
equal when they denote the same move from the same position.
"""
from typing import Hashable, Protocol, Sequence, TypeVar, runtime_checkable

PlayerT = TypeVar("PlayerT")
ActionT = TypeVar("ActionT", bound=Hashable)


@runtime_checkable
class GameState(Protocol[PlayerT, ActionT]):
    """
    One position of a perfect-information, turn-based game.

    Implementations mutate themselves in ``apply_action``; the engine only
    ever mutates clones it owns.
    """

    def clone(self) -> "GameState[PlayerT, ActionT]":
        """Return a deep, independent copy of this state."""
        ...

    def current_player(self) -> PlayerT:
        """Return the player to move."""
        ...

    def legal_actions(self) -> Sequence[ActionT]:
        """
        Return the actions legal from this state.

        The sequence is empty exactly when the game has ended, and repeated
        calls without an intervening mutation return equal sequences.
        """
        ...

    def apply_action(self, action: ActionT) -> None:
        """
        Play ``action`` in place.

        Raises:
            IllegalActionError: If ``action`` is not currently legal
        """
        ...

    def result(self, player: PlayerT) -> float:
        """
        Score the finished game for ``player``: 1.0 win, 0.0 loss, 0.5 draw.

        Raises:
            PrematureResultError: If the game has not ended
        """
        ...

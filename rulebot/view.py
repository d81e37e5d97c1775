from typing import Any, Sequence

from verifiers.types import State

from .actions import Action, Card, Discard, HintColour, HintValue, IllegalActionError, Play
from .config import CONFIG, GameConfig
from .hints import encode_hint
from .utils import card_from_tuple, card_to_str, is_deck_exhausted, playable_value


class GameView:
    """Read-only accessor over the environment's game state.

    Expects the environment layout (``hands``, ``fireworks``, ``info_tokens``,
    ``life_tokens``, ``deck``, ``final_round_turns``, ``current_player``) plus
    ``history``, the chronological list of actions taken so far, and
    optionally ``turn``, the number of actions taken (defaults to the history
    length).
    """

    def __init__(self, state: State, config: GameConfig | None = None):
        self.state = state
        self.config = config if config is not None else CONFIG

    @property
    def num_players(self) -> int:
        return len(self.state["hands"])

    @property
    def current_player(self) -> int:
        return self.state["current_player"]

    @property
    def info_tokens(self) -> int:
        return self.state["info_tokens"]

    @property
    def life_tokens(self) -> int:
        return self.state["life_tokens"]

    @property
    def fireworks(self) -> dict[str, int]:
        return self.state["fireworks"]

    @property
    def deck_exhausted(self) -> bool:
        return is_deck_exhausted(self.state)

    @property
    def history(self) -> Sequence[Any]:
        return self.state.get("history") or []

    @property
    def turn(self) -> int:
        turn = self.state.get("turn")
        return len(self.history) if turn is None else turn

    def hand(self, player_id: int) -> list[Card | None]:
        """Cards held by another player, None for empty slots."""
        return [card_from_tuple(card, self.config) for card in self.state["hands"][player_id]]

    def occupied(self, player_id: int) -> list[bool]:
        """Which slots of a hand hold a card, without revealing the cards."""
        return [card is not None for card in self.state["hands"][player_id]]

    def playable(self, colour: str) -> int | None:
        return playable_value(self.fireworks, colour, self.config)

    def validate(self, action: Action, player_id: int) -> None:
        """Raise IllegalActionError if ``player_id`` may not take ``action`` now."""
        if isinstance(action, (Play, Discard)):
            occupied = self.occupied(player_id)
            if not 0 <= action.slot < len(occupied):
                raise IllegalActionError(f"Slot {action.slot} out of range 0-{len(occupied) - 1}")
            if not occupied[action.slot]:
                raise IllegalActionError(f"Slot {action.slot} holds no card")
            return

        if self.info_tokens <= 0:
            raise IllegalActionError("Cannot hint with no info tokens")
        if not 0 <= action.receiver < self.num_players:
            raise IllegalActionError(f"Invalid hint receiver {action.receiver}")
        if action.receiver == player_id:
            raise IllegalActionError("Cannot hint yourself")

        hand = self.hand(action.receiver)
        if isinstance(action, HintColour):
            expected = encode_hint(hand, "colour", action.colour)
        elif isinstance(action, HintValue):
            expected = encode_hint(hand, "value", action.value)
        else:
            raise IllegalActionError(f"Unknown action {action!r}")
        if tuple(action.mask) != expected:
            cards = " ".join(card_to_str(card) for card in hand)
            raise IllegalActionError(f"Hint mask {action.mask} does not match receiver hand {cards}")
        if not any(expected):
            raise IllegalActionError("Hint touches no card")

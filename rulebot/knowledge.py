import logging
from typing import Any, Literal, Sequence

from .actions import HintColour, HintValue, parse_history_entry
from .config import CONFIG, GameConfig
from .hints import decode_hint

logger = logging.getLogger(__name__)


class KnowledgeTracker:
    """What one agent has been told about each slot of its own hand.

    Knowledge comes only from hints received about a slot; it is never ground
    truth. A slot is reset to (None, None) whenever its card leaves the hand.
    """

    def __init__(self, hand_size: int):
        self.colours: list[str | None] = [None] * hand_size
        self.values: list[int | None] = [None] * hand_size

    def __len__(self) -> int:
        return len(self.colours)

    def __getitem__(self, slot: int) -> tuple[str | None, int | None]:
        return self.colours[slot], self.values[slot]

    def snapshot(self) -> list[tuple[str | None, int | None]]:
        return list(zip(self.colours, self.values))

    def refresh(
        self,
        history: Sequence[Any],
        seat: int,
        num_players: int,
        turn: int,
        config: GameConfig | None = None,
    ) -> int:
        """Replay the hints addressed to ``seat`` since its previous turn.

        Looks back at most ``min(num_players - 1, turn)`` actions, so each
        teammate's hint is seen once per round and an early game never reaches
        past its start. Malformed records, including hints about a colour or
        value outside the game's palette, are skipped.

        Args:
            history: Chronological action records, oldest first.
            seat: Seat index of this agent.
            num_players: Number of players in the game.
            turn: Number of actions taken so far in the game.
            config: Game configuration (uses default if not provided).

        Returns:
            Number of hints applied.
        """
        if config is None:
            config = CONFIG
        window = min(num_players - 1, turn, len(history))
        if window <= 0:
            return 0

        applied = 0
        for entry in history[-window:]:
            action = parse_history_entry(entry)
            if action is None:
                logger.debug("Ignoring unreadable history entry: %r", entry)
                continue
            if not isinstance(action, (HintColour, HintValue)) or action.receiver != seat:
                continue
            if action.mask is None:
                logger.debug("Ignoring hint without mask: %r", entry)
                continue
            if isinstance(action, HintColour) and action.colour not in config.colors:
                logger.debug("Ignoring hint about unknown colour: %r", entry)
                continue
            if isinstance(action, HintValue) and action.value not in config.ranks:
                logger.debug("Ignoring hint about unknown value: %r", entry)
                continue
            decode_hint(self.colours, self.values, action)
            applied += 1
        return applied

    def restore(self, snapshot: list[tuple[str | None, int | None]]) -> None:
        """Put back knowledge previously taken with ``snapshot``."""
        self.colours[:] = [colour for colour, _ in snapshot]
        self.values[:] = [value for _, value in snapshot]

    def reset(self, slot: int) -> None:
        self.colours[slot] = None
        self.values[slot] = None

    def vacate(self, slot: int, refill: Literal["in_place", "shift_left"] = "in_place") -> None:
        """Forget the card that just left ``slot``.

        With ``shift_left`` the cards to the right move one slot left, taking
        their knowledge with them, and the fresh draw lands in the last slot.
        """
        if refill == "shift_left":
            del self.colours[slot]
            del self.values[slot]
            self.colours.append(None)
            self.values.append(None)
        else:
            self.reset(slot)

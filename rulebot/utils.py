"""Utility functions for reading Hanabi game state."""

from typing import TYPE_CHECKING, Mapping

from verifiers.types import State

from .actions import Card
from .config import CONFIG

if TYPE_CHECKING:
    from .config import GameConfig


def card_from_tuple(card: tuple[int, int] | None, config: "GameConfig | None" = None) -> Card | None:
    """Convert an environment card tuple to a Card.

    Args:
        card: Tuple of (color_idx, rank_idx) or None for empty slot.
        config: Game configuration (uses default if not provided).

    Returns:
        The Card, or None for an empty slot.
    """
    if card is None:
        return None
    if config is None:
        config = CONFIG
    color_idx, rank_idx = card
    return Card(config.colors[color_idx], config.ranks[rank_idx])


def card_to_str(card: Card | None) -> str:
    """Convert a card to a human-readable string (e.g., 'R1', 'G5'), '--' for empty slots."""
    if card is None:
        return "--"
    return str(card)


def playable_value(fireworks: Mapping[str, int], colour: str, config: "GameConfig | None" = None) -> int | None:
    """Value of the next card playable on a firework.

    Args:
        fireworks: Height of each colour's firework (0 = none started).
        colour: Colour to look up.
        config: Game configuration (uses default if not provided).

    Returns:
        Firework size + 1, or None once the firework is complete.
    """
    if config is None:
        config = CONFIG
    size = fireworks[colour]
    if size >= config.max_rank:
        return None
    return size + 1


def is_playable(card: Card, fireworks: Mapping[str, int], config: "GameConfig | None" = None) -> bool:
    return card.value == playable_value(fireworks, card.colour, config)


def is_useless(colour: str, value: int, fireworks: Mapping[str, int], config: "GameConfig | None" = None) -> bool:
    """A card is useless once its firework is complete or has passed its value."""
    playable = playable_value(fireworks, colour, config)
    return playable is None or value < playable


def is_deck_exhausted(state: State) -> bool:
    """Check whether the draw pile has run out.

    The environment starts the final-round countdown the moment the last
    card is drawn, so either signal counts.
    """
    if state.get("final_round_turns") is not None:
        return True
    if "deck_count" in state:
        return state["deck_count"] == 0
    return len(state["deck"]) == 0

from typing import Any, Sequence

import numpy as np
import pytest

from rulebot.config import CONFIG
from rulebot.player import init_agent_state


def card(text: str | None) -> tuple[int, int] | None:
    """'R1' -> (color_idx, rank_idx) as the environment stores cards, '--' or None -> empty slot."""
    if text is None or text == "--":
        return None
    return CONFIG.colors.index(text[0]), CONFIG.ranks.index(int(text[1:]))


def make_state(
    hands: Sequence[Sequence[str | None]],
    fireworks: dict[str, int] | None = None,
    info_tokens: int = 8,
    life_tokens: int = 3,
    deck_count: int = 20,
    current_player: int = 0,
    history: list[Any] | None = None,
    turn: int | None = None,
) -> dict[str, Any]:
    """Build a game state in the environment's layout."""
    state: dict[str, Any] = {
        "hands": [[card(c) for c in hand] for hand in hands],
        "fireworks": {color: 0 for color in CONFIG.colors},
        "info_tokens": info_tokens,
        "life_tokens": life_tokens,
        "deck": [(0, 0)] * deck_count,
        "discard_pile": [],
        "current_player": current_player,
        "score": 0,
        "final_round_turns": None if deck_count else len(hands),
        "history": history if history is not None else [],
    }
    if fireworks:
        state["fireworks"].update(fireworks)
        state["score"] = sum(state["fireworks"].values())
    if turn is not None:
        state["turn"] = turn
    return state


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def two_player_state() -> dict[str, Any]:
    return make_state([["R1", "G2", "B3", "W4", "Y5"], ["R2", "G1", "B4", "W3", "Y2"]])


@pytest.fixture
def agent():
    return init_agent_state(0, 2)

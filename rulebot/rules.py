"""The rule cascade.

Each rule looks at the game view and the agent's own state and either returns
an action or None to abstain. ``first_match`` runs a list of rules in order
and commits to the first action produced. Rules never mutate anything; the
selector applies knowledge and recency updates once an action is chosen.
"""

import logging
from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

from .actions import Action, Discard, Play
from .config import AgentConfig
from .hints import build_hint, coin_flip_hint
from .utils import is_playable, is_useless
from .view import GameView

if TYPE_CHECKING:
    from .player import AgentState

logger = logging.getLogger(__name__)

Rule = Callable[[GameView, "AgentState", AgentConfig, np.random.Generator], "Action | None"]


def _teammates(view: GameView, seat: int) -> list[int]:
    """Other seats in turn order, starting with the next player."""
    return [(seat + offset) % view.num_players for offset in range(1, view.num_players)]


def _occupied_slots(view: GameView, seat: int) -> list[int]:
    return [slot for slot, full in enumerate(view.occupied(seat)) if full]


def _holding_discards(view: GameView, settings: AgentConfig) -> bool:
    return settings.hold_discards_at_max_tokens and view.info_tokens >= view.config.max_info_tokens


def guess_play(view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator) -> Action | None:
    """Play a random card with ``guess_probability`` per remaining life, first success wins."""
    slots = _occupied_slots(view, agent.seat)
    if not slots:
        return None
    for _ in range(view.life_tokens):
        if rng.random() < settings.guess_probability:
            return Play(slots[int(rng.integers(len(slots)))])
    return None


def known_safe_play(
    view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator
) -> Action | None:
    """Play the first slot whose known colour and value is the next card on its firework."""
    occupied = view.occupied(agent.seat)
    for slot, (colour, value) in enumerate(agent.knowledge.snapshot()):
        if colour is None or value is None or slot >= len(occupied) or not occupied[slot]:
            continue
        if value == view.playable(colour):
            return Play(slot)
    return None


def end_game(view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator) -> Action | None:
    """Once the deck is gone and a life can be spared, play a safe card or take a guess."""
    if view.life_tokens <= 1 or not view.deck_exhausted:
        return None
    action = known_safe_play(view, agent, settings, rng)
    if action is None:
        action = guess_play(view, agent, settings, rng)
    return action


def informative_hint(
    view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator
) -> Action | None:
    """Point out the first playable card in a teammate's hand."""
    if view.info_tokens <= 0:
        return None
    for player_id in _teammates(view, agent.seat):
        hand = view.hand(player_id)
        for card in hand:
            if card is not None and is_playable(card, view.fireworks, view.config):
                return coin_flip_hint(player_id, hand, card, rng)
    return None


def dispensable_hint(
    view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator
) -> Action | None:
    """When hints run low, point out a card a teammate can safely throw away.

    A colour hint on a finished firework is preferred since it clears every
    card of that colour at once.
    """
    if view.info_tokens <= 0 or view.info_tokens >= settings.dispensable_hint_threshold:
        return None

    teammates = _teammates(view, agent.seat)
    for player_id in teammates:
        hand = view.hand(player_id)
        for card in hand:
            if card is not None and view.playable(card.colour) is None:
                return build_hint(player_id, hand, card, "colour")

    for player_id in teammates:
        hand = view.hand(player_id)
        for card in hand:
            if card is not None and is_useless(card.colour, card.value, view.fireworks, view.config):
                return build_hint(player_id, hand, card, "value")
    return None


def known_discard(
    view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator
) -> Action | None:
    """Discard the first slot known to hold a card that can no longer be played."""
    if _holding_discards(view, settings):
        return None
    occupied = view.occupied(agent.seat)
    for slot, (colour, value) in enumerate(agent.knowledge.snapshot()):
        if colour is None or not value or slot >= len(occupied) or not occupied[slot]:
            continue
        if is_useless(colour, value, view.fireworks, view.config):
            return Discard(slot)
    return None


def random_hint(view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator) -> Action | None:
    """Tell the next player something about a random card of theirs."""
    if view.info_tokens <= 0:
        return None
    player_id = (agent.seat + 1) % view.num_players
    slots = _occupied_slots(view, player_id)
    if not slots:
        return None
    hand = view.hand(player_id)
    card = hand[slots[int(rng.integers(len(slots)))]]
    return coin_flip_hint(player_id, hand, card, rng)


def discard_oldest(
    view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator
) -> Action | None:
    """Discard the card held longest, while the deck can still refill the hand."""
    if view.deck_exhausted or _holding_discards(view, settings):
        return None
    slot = agent.recency.oldest(view.occupied(agent.seat))
    return None if slot is None else Discard(slot)


def discard_random(view: GameView, agent: "AgentState", settings: AgentConfig, rng: np.random.Generator) -> Action:
    """Discard a random card. Never abstains."""
    slots = _occupied_slots(view, agent.seat) or list(range(len(agent.knowledge)))
    return Discard(slots[int(rng.integers(len(slots)))])


RULES: dict[str, Rule] = {
    "end_game": end_game,
    "known_safe_play": known_safe_play,
    "informative_hint": informative_hint,
    "dispensable_hint": dispensable_hint,
    "known_discard": known_discard,
    "random_hint": random_hint,
    "discard_oldest": discard_oldest,
    "discard_random": discard_random,
}


def first_match(
    rule_names: Iterable[str],
    view: GameView,
    agent: "AgentState",
    settings: AgentConfig,
    rng: np.random.Generator,
) -> tuple[str, Action] | None:
    """Evaluate rules in order and return the first (name, action) produced."""
    for name in rule_names:
        action = RULES[name](view, agent, settings, rng)
        if action is not None:
            return name, action
        logger.debug("Player %d: rule %s abstained", agent.seat, name)
    return None

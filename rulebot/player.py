import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
from verifiers.types import State

from .actions import Action, DecisionAbortedError, Discard, IllegalActionError, Play, describe_action, to_tool_args
from .config import AGENT_CONFIG, CONFIG, AgentConfig, GameConfig
from .knowledge import KnowledgeTracker
from .recency import RecencyTracker
from .rules import first_match
from .view import GameView

logger = logging.getLogger(__name__)


@dataclass
class AgentState:
    """Private state of one agent for the length of a game.

    Created once by ``init_agent_state`` and then updated only by ``decide``:
    hints are replayed into ``knowledge`` at the start of each call, and the
    slot of a played or discarded card is cleared in ``knowledge`` and moved
    to the back of ``recency`` at the end.
    """

    seat: int
    num_players: int
    knowledge: KnowledgeTracker
    recency: RecencyTracker


def init_agent_state(
    seat: int,
    num_players: int,
    config: GameConfig | None = None,
    hand_size: int | None = None,
) -> AgentState:
    if config is None:
        config = CONFIG
    if num_players < 2:
        raise ValueError("Number of players must be greater than 1")
    if not 0 <= seat < num_players:
        raise ValueError(f"Invalid seat {seat}. Must be 0-{num_players - 1}")
    if hand_size is None:
        hand_size = config.hand_size_for(num_players)
    return AgentState(seat, num_players, KnowledgeTracker(hand_size), RecencyTracker(hand_size))


def decide(
    view: GameView,
    agent: AgentState,
    settings: AgentConfig,
    rng: np.random.Generator,
) -> Action:
    """Choose this turn's action.

    Replays the hints received since the last turn, runs the rule cascade
    and commits to the first rule that fires. The action is checked against
    the game state before any post-action update; an illegal action aborts
    the call and puts the knowledge back as it was before the replay.

    Raises:
        DecisionAbortedError: No rule fired or the chosen action is illegal.
    """
    saved = agent.knowledge.snapshot()
    applied = agent.knowledge.refresh(view.history, agent.seat, agent.num_players, view.turn, view.config)
    if applied:
        logger.debug("Player %d: applied %d hint(s), knowledge %s", agent.seat, applied, agent.knowledge.snapshot())

    match = first_match(settings.rule_names, view, agent, settings, rng)
    if match is None:
        agent.knowledge.restore(saved)
        raise DecisionAbortedError(f"Player {agent.seat}: no rule produced an action")
    rule_name, action = match

    try:
        view.validate(action, agent.seat)
    except IllegalActionError as e:
        agent.knowledge.restore(saved)
        logger.exception("Player %d: rule %s produced illegal action %s", agent.seat, rule_name, action)
        raise DecisionAbortedError(f"Player {agent.seat}: illegal action from rule {rule_name}") from e

    if isinstance(action, (Play, Discard)):
        agent.knowledge.vacate(action.slot, view.config.refill)
        agent.recency.vacate(action.slot, view.config.refill)

    logger.debug("Player %d: rule %s chose %s", agent.seat, rule_name, describe_action(action))
    return action


class RuleBasedPlayer:
    """Represents a rule-based player in the Hanabi game."""

    def __init__(
        self,
        player_id: int,
        num_players: int,
        settings: AgentConfig | None = None,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
        hand_size: int | None = None,
    ):
        self.player_id = player_id
        self.settings = settings if settings is not None else AGENT_CONFIG
        self.config = config if config is not None else CONFIG
        self.rng = rng if rng is not None else np.random.default_rng(self.settings.seed)
        self.agent = init_agent_state(player_id, num_players, self.config, hand_size)
        logger.info(
            "RuleBasedPlayer P%d initialized (players: %d, rules: %s)",
            player_id,
            num_players,
            ", ".join(self.settings.rule_names),
        )

    @classmethod
    def from_state(cls, state: State, **kwargs) -> "RuleBasedPlayer":
        """Register the player whose turn it is, sized from the state's hands."""
        player_id = state["current_player"]
        hands = state["hands"]
        return cls(player_id, len(hands), hand_size=len(hands[player_id]), **kwargs)

    def __str__(self) -> str:
        return f"RuleBasedPlayer(P{self.player_id})"

    def choose_action(self, state: State) -> Action:
        return decide(GameView(state, self.config), self.agent, self.settings, self.rng)

    def take_turn(self, state: State, action_fn: Callable[..., str] | None = None) -> str:
        """Choose an action and submit it through the environment's action function.

        Args:
            state: Current game state.
            action_fn: Environment function taking the tool arguments plus
                ``game_state`` and ``player_id``. When omitted the action is
                only described.

        Returns:
            The environment's feedback, or the short action notation.
        """
        action = self.choose_action(state)
        if action_fn is None:
            return describe_action(action)
        return action_fn(game_state=state, player_id=self.player_id, **to_tool_args(action))

"""Each rule of the cascade against synthetic game states."""

import numpy as np
import pytest

from conftest import make_state
from rulebot import rules
from rulebot.actions import Discard, HintColour, HintValue, Play
from rulebot.config import AgentConfig
from rulebot.player import init_agent_state
from rulebot.view import GameView

SETTINGS = AgentConfig()
OWN_HAND = ["R1", "G2", "B3", "W4"]


def setup(hands, seat=0, **kwargs):
    state = make_state(hands, current_player=seat, **kwargs)
    agent = init_agent_state(seat, len(hands), hand_size=len(hands[seat]))
    return GameView(state), agent


def know(agent, slot, colour=None, value=None):
    agent.knowledge.colours[slot] = colour
    agent.knowledge.values[slot] = value


class TestKnownSafePlay:
    def test_plays_first_fully_known_playable_slot(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], fireworks={"G": 1})
        know(agent, 0, "R", 2)
        know(agent, 1, "G", 2)
        know(agent, 2, "B", 1)
        assert rules.known_safe_play(view, agent, SETTINGS, rng) == Play(1)

    def test_partial_knowledge_never_plays(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]])
        know(agent, 0, None, 1)
        know(agent, 1, "R", None)
        assert rules.known_safe_play(view, agent, SETTINGS, rng) is None

    def test_complete_firework_never_playable(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], fireworks={"R": 5})
        know(agent, 0, "R", 5)
        assert rules.known_safe_play(view, agent, SETTINGS, rng) is None


class TestEndGame:
    def test_needs_exhausted_deck(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], deck_count=5)
        know(agent, 0, "R", 1)
        assert rules.end_game(view, agent, SETTINGS, rng) is None

    @pytest.mark.parametrize("life_tokens", [0, 1])
    def test_never_fires_on_last_life(self, rng, life_tokens):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], deck_count=0, life_tokens=life_tokens)
        know(agent, 0, "R", 1)
        settings = AgentConfig(guess_probability=1.0)
        assert rules.end_game(view, agent, settings, rng) is None

    def test_prefers_known_safe_play(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], deck_count=0, fireworks={"B": 2})
        know(agent, 2, "B", 3)
        settings = AgentConfig(guess_probability=1.0)
        assert rules.end_game(view, agent, settings, rng) == Play(2)

    def test_guesses_an_occupied_slot(self, rng):
        view, agent = setup([["R1", None, "B3", None], ["Y3", "Y4", "Y5", "W5"]], deck_count=0)
        settings = AgentConfig(guess_probability=1.0)
        for _ in range(20):
            assert rules.end_game(view, agent, settings, rng) in (Play(0), Play(2))

    def test_no_guess_with_zero_probability(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], deck_count=0)
        settings = AgentConfig(guess_probability=0.0)
        assert rules.end_game(view, agent, settings, rng) is None


class TestInformativeHint:
    def test_hints_first_playable_card_in_turn_order(self, rng):
        hands = [OWN_HAND, ["Y3", "Y4", "B5", "W5"], ["G3", "R1", "R2", "R1"]]
        view, agent = setup(hands)
        action = rules.informative_hint(view, agent, SETTINGS, rng)
        assert action in (
            HintColour(2, (False, True, True, True), "R"),
            HintValue(2, (False, True, False, True), 1),
        )

    def test_starts_at_next_player(self, rng):
        hands = [["Y3", "Y4", "B5", "W5"], ["G1", "Y4", "B5", "W5"], OWN_HAND]
        view, agent = setup(hands, seat=2)
        action = rules.informative_hint(view, agent, SETTINGS, rng)
        # seat 0 holds nothing playable, so the hint goes to seat 1
        assert action.receiver == 1

    def test_abstains_without_tokens(self, rng):
        view, agent = setup([OWN_HAND, ["R1", "Y1", "G1", "W1"]], info_tokens=0)
        assert rules.informative_hint(view, agent, SETTINGS, rng) is None

    def test_abstains_when_nothing_playable(self, rng):
        view, agent = setup([OWN_HAND, ["R3", "Y4", "G2", "W5"]])
        assert rules.informative_hint(view, agent, SETTINGS, rng) is None


class TestDispensableHint:
    def test_only_when_tokens_low(self, rng):
        view, agent = setup([OWN_HAND, ["R1", "Y4", "G2", "W5"]], fireworks={"R": 3}, info_tokens=4)
        assert rules.dispensable_hint(view, agent, SETTINGS, rng) is None

    def test_abstains_without_tokens(self, rng):
        view, agent = setup([OWN_HAND, ["R1", "Y4", "G2", "W5"]], fireworks={"R": 3}, info_tokens=0)
        assert rules.dispensable_hint(view, agent, SETTINGS, rng) is None

    def test_value_hint_on_useless_card(self, rng):
        view, agent = setup([OWN_HAND, ["Y4", "R1", "G2", "W1"]], fireworks={"R": 3}, info_tokens=3)
        assert rules.dispensable_hint(view, agent, SETTINGS, rng) == HintValue(1, (False, True, False, True), 1)

    def test_prefers_colour_hint_on_complete_firework(self, rng):
        hands = [OWN_HAND, ["R1", "Y4", "G2", "W1"], ["G3", "B4", "W2", "B2"]]
        view, agent = setup(hands, fireworks={"R": 3, "B": 5}, info_tokens=2)
        assert rules.dispensable_hint(view, agent, SETTINGS, rng) == HintColour(2, (False, True, False, True), "B")

    def test_threshold_is_configurable(self, rng):
        view, agent = setup([OWN_HAND, ["Y4", "R1", "G2", "W1"]], fireworks={"R": 3}, info_tokens=6)
        settings = AgentConfig(dispensable_hint_threshold=8)
        assert rules.dispensable_hint(view, agent, settings, rng) == HintValue(1, (False, True, False, True), 1)


class TestKnownDiscard:
    def test_discards_known_useless_card(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], fireworks={"G": 3}, info_tokens=5)
        know(agent, 0, "R", 1)
        know(agent, 1, "G", 2)
        assert rules.known_discard(view, agent, SETTINGS, rng) == Discard(1)

    def test_needs_both_attributes(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], fireworks={"G": 3}, info_tokens=5)
        know(agent, 1, None, 2)
        know(agent, 2, "G", None)
        assert rules.known_discard(view, agent, SETTINGS, rng) is None

    def test_held_at_max_tokens(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], fireworks={"G": 3}, info_tokens=8)
        know(agent, 1, "G", 2)
        assert rules.known_discard(view, agent, SETTINGS, rng) is None
        settings = AgentConfig(hold_discards_at_max_tokens=False)
        assert rules.known_discard(view, agent, settings, rng) == Discard(1)


class TestRandomHint:
    def test_hints_a_card_of_next_player(self, rng):
        hands = [OWN_HAND, ["Y3", None, "Y5", "W5"], ["R1", "R1", "R1", "R1"]]
        view, agent = setup(hands, info_tokens=1)
        for _ in range(20):
            action = rules.random_hint(view, agent, SETTINGS, rng)
            assert action.receiver == 1
            assert action.mask[1] is False
            assert any(action.mask)

    def test_abstains_without_tokens(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], info_tokens=0)
        assert rules.random_hint(view, agent, SETTINGS, rng) is None

    def test_abstains_on_empty_hand(self, rng):
        view, agent = setup([OWN_HAND, [None, None, None, None]])
        assert rules.random_hint(view, agent, SETTINGS, rng) is None


class TestDiscardOldest:
    def test_discards_oldest_slot(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], info_tokens=5)
        agent.recency.vacate(0)
        assert rules.discard_oldest(view, agent, SETTINGS, rng) == Discard(1)

    def test_skipped_once_deck_exhausted(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], info_tokens=5, deck_count=0)
        assert rules.discard_oldest(view, agent, SETTINGS, rng) is None

    def test_held_at_max_tokens(self, rng):
        view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], info_tokens=8)
        assert rules.discard_oldest(view, agent, SETTINGS, rng) is None


class TestDiscardRandom:
    def test_discards_occupied_slot(self, rng):
        view, agent = setup([[None, "G2", None, "W4"], ["Y3", "Y4", "Y5", "W5"]], info_tokens=8, deck_count=0)
        for _ in range(20):
            assert rules.discard_random(view, agent, SETTINGS, rng) in (Discard(1), Discard(3))


def test_first_match_returns_first_firing_rule(rng):
    view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], info_tokens=0)
    know(agent, 3, "W", 1)
    names = ("informative_hint", "known_safe_play", "discard_random")
    assert rules.first_match(names, view, agent, SETTINGS, rng) == ("known_safe_play", Play(3))


def test_every_rule_is_registered():
    assert set(rules.RULES) == set(AgentConfig().rule_names)


def test_rules_do_not_touch_agent_state():
    view, agent = setup([OWN_HAND, ["Y3", "Y4", "Y5", "W5"]], info_tokens=3, deck_count=0)
    know(agent, 0, "R", 1)
    before = (agent.knowledge.snapshot(), list(agent.recency.order))
    rng = np.random.default_rng(7)
    for rule in rules.RULES.values():
        rule(view, agent, SETTINGS, rng)
    assert (agent.knowledge.snapshot(), agent.recency.order) == before

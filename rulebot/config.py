from dataclasses import dataclass
from typing import Literal, Optional

# Valid colors and ranks - configs must be subsets of these
VALID_COLORS = ("R", "Y", "G", "W", "B")
VALID_RANKS = (1, 2, 3, 4, 5)
REFILL_MODES = ("in_place", "shift_left")

# Rule names understood by the cascade, see rules.RULES
RULE_NAMES = (
    "end_game",
    "known_safe_play",
    "informative_hint",
    "dispensable_hint",
    "known_discard",
    "random_hint",
    "discard_oldest",
    "discard_random",
)

RULE_PRESETS: dict[str, tuple[str, ...]] = {
    "default": RULE_NAMES,
    "cautious": (
        "known_safe_play",
        "end_game",
        "informative_hint",
        "dispensable_hint",
        "known_discard",
        "discard_oldest",
        "random_hint",
        "discard_random",
    ),
    "basic": (
        "known_safe_play",
        "known_discard",
        "informative_hint",
        "discard_random",
    ),
}

# Only rule that never abstains
TERMINAL_RULE = "discard_random"


@dataclass(frozen=True)
class GameConfig:
    colors: tuple[str, ...] = VALID_COLORS
    ranks: tuple[int, ...] = VALID_RANKS
    hand_size: Optional[int] = None
    max_info_tokens: int = 8
    refill: Literal["in_place", "shift_left"] = "in_place"

    def __post_init__(self) -> None:
        # Validate colors are subset of valid colors
        for color in self.colors:
            if color not in VALID_COLORS:
                raise ValueError(f"Invalid color '{color}'. Must be one of {VALID_COLORS}")

        # Validate ranks
        if len(self.ranks) < 2:
            raise ValueError("Must have at least 2 ranks")
        for rank in self.ranks:
            if rank not in VALID_RANKS:
                raise ValueError(f"Invalid rank {rank}. Must be one of {VALID_RANKS}")

        if self.hand_size is not None and self.hand_size < 1:
            raise ValueError("hand_size must be at least 1")
        if self.max_info_tokens < 1:
            raise ValueError("max_info_tokens must be at least 1")
        if self.refill not in REFILL_MODES:
            raise ValueError(f"Invalid refill mode '{self.refill}'. Must be one of {REFILL_MODES}")

    @property
    def num_colors(self) -> int:
        return len(self.colors)

    @property
    def max_rank(self) -> int:
        return max(self.ranks)

    def hand_size_for(self, num_players: int) -> int:
        """Cards per hand: 5 for two or three players, 4 otherwise."""
        if self.hand_size is not None:
            return self.hand_size
        return 5 if num_players <= 3 else 4


@dataclass(frozen=True)
class AgentConfig:
    """Tunables of the rule cascade.

    ``rules`` is either a preset name from ``RULE_PRESETS`` or an explicit
    ordered tuple of rule names. ``hold_discards_at_max_tokens`` makes the
    known-discard and discard-oldest rules abstain while the hint pool is
    full.
    """

    rules: str | tuple[str, ...] = "default"
    guess_probability: float = 0.05
    dispensable_hint_threshold: int = 4
    hold_discards_at_max_tokens: bool = True
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.rules, str):
            if self.rules not in RULE_PRESETS:
                raise ValueError(f"Unknown rule preset '{self.rules}'. Must be one of {tuple(RULE_PRESETS)}")
        else:
            object.__setattr__(self, "rules", tuple(self.rules))
            for name in self.rules:
                if name not in RULE_NAMES:
                    raise ValueError(f"Unknown rule '{name}'. Must be one of {RULE_NAMES}")
            if not self.rules or self.rules[-1] != TERMINAL_RULE:
                raise ValueError(f"Rule list must end with '{TERMINAL_RULE}'")

        if not 0.0 <= self.guess_probability <= 1.0:
            raise ValueError("guess_probability must be within [0, 1]")
        if self.dispensable_hint_threshold < 0:
            raise ValueError("dispensable_hint_threshold must be non-negative")

    @property
    def rule_names(self) -> tuple[str, ...]:
        if isinstance(self.rules, str):
            return RULE_PRESETS[self.rules]
        return self.rules


# Default configs (standard Hanabi: 5 colors, ranks 1-5, 8 info tokens)
CONFIG = GameConfig()
AGENT_CONFIG = AgentConfig()

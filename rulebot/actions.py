"""Card and action value types exchanged with the game environment."""

from dataclasses import dataclass
from typing import Any, Mapping, Union


class IllegalActionError(ValueError):
    """A constructed action breaks the rules of the game."""


class DecisionAbortedError(RuntimeError):
    """A decision call could not produce a legal action."""


@dataclass(frozen=True)
class Card:
    colour: str
    value: int

    def __str__(self) -> str:
        return f"{self.colour}{self.value}"


@dataclass(frozen=True)
class Play:
    slot: int


@dataclass(frozen=True)
class Discard:
    slot: int


@dataclass(frozen=True)
class HintColour:
    receiver: int
    mask: tuple[bool, ...]
    colour: str


@dataclass(frozen=True)
class HintValue:
    receiver: int
    mask: tuple[bool, ...]
    value: int


Action = Union[Play, Discard, HintColour, HintValue]
Hint = Union[HintColour, HintValue]


def describe_action(action: Action) -> str:
    """Short notation for an action: 'P2', 'D0', '1HR' or '2H3'."""
    if isinstance(action, Play):
        return f"P{action.slot}"
    if isinstance(action, Discard):
        return f"D{action.slot}"
    if isinstance(action, HintColour):
        return f"{action.receiver}H{action.colour}"
    return f"{action.receiver}H{action.value}"


def to_tool_args(action: Action) -> dict[str, Any]:
    """Convert an action to the keyword arguments of the environment's action tool."""
    if isinstance(action, Play):
        return {"action_type": "play", "position": action.slot}
    if isinstance(action, Discard):
        return {"action_type": "discard", "position": action.slot}
    if isinstance(action, HintColour):
        return {"action_type": "hint", "target_player": action.receiver, "hint_value": action.colour}
    return {"action_type": "hint", "target_player": action.receiver, "hint_value": str(action.value)}


def parse_history_entry(entry: Any) -> Action | None:
    """Read one history record as an action.

    Records are either action instances or mappings in tool-argument form
    with an extra ``mask`` (or ``hinted``) list for hints. Returns None for
    anything that cannot be read.
    """
    if isinstance(entry, (Play, Discard, HintColour, HintValue)):
        return entry
    if not isinstance(entry, Mapping):
        return None

    action_type = entry.get("action_type")
    if action_type in ("play", "discard"):
        position = entry.get("position")
        if not isinstance(position, int):
            return None
        return Play(position) if action_type == "play" else Discard(position)
    if action_type != "hint":
        return None

    receiver = entry.get("target_player")
    hint_value = entry.get("hint_value")
    mask = entry.get("mask", entry.get("hinted"))
    if not isinstance(receiver, int) or hint_value is None or mask is None:
        return None
    try:
        mask = tuple(bool(hit) for hit in mask)
    except TypeError:
        return None

    hint_value = str(hint_value)
    if hint_value.isdigit():
        return HintValue(receiver, mask, int(hint_value))
    return HintColour(receiver, mask, hint_value)

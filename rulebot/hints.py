"""Hint masks: which slots of a hand a colour or value hint touches."""

from typing import Literal, Sequence

import numpy as np

from .actions import Card, Hint, HintColour, HintValue

HintKind = Literal["colour", "value"]


def encode_hint(hand: Sequence[Card | None], kind: HintKind, attribute: str | int) -> tuple[bool, ...]:
    """Mark the slots whose card matches a hinted colour or value.

    Empty slots are always False.
    """
    if kind == "colour":
        return tuple(card is not None and card.colour == attribute for card in hand)
    return tuple(card is not None and card.value == attribute for card in hand)


def build_hint(receiver: int, hand: Sequence[Card | None], card: Card, kind: HintKind) -> Hint:
    """Hint that discriminates ``card`` in the receiver's hand."""
    if kind == "colour":
        return HintColour(receiver, encode_hint(hand, "colour", card.colour), card.colour)
    return HintValue(receiver, encode_hint(hand, "value", card.value), card.value)


def coin_flip_hint(receiver: int, hand: Sequence[Card | None], card: Card, rng: np.random.Generator) -> Hint:
    """Colour or value hint about ``card``, chosen with equal odds."""
    kind: HintKind = "colour" if rng.random() < 0.5 else "value"
    return build_hint(receiver, hand, card, kind)


def decode_hint(
    colours: list[str | None],
    values: list[int | None],
    hint: Hint,
) -> None:
    """Write a received hint into per-slot knowledge.

    Only slots marked in the mask change; the hinted attribute overwrites
    whatever was known before, so applying the same hint twice is a no-op.
    Mask entries beyond the hand are ignored.
    """
    for slot, hit in enumerate(hint.mask[: len(colours)]):
        if not hit:
            continue
        if isinstance(hint, HintColour):
            colours[slot] = hint.colour
        elif isinstance(hint, HintValue):
            values[slot] = hint.value

from typing import Literal, Sequence


class RecencyTracker:
    """Hand slots ordered by when their card arrived, oldest first."""

    def __init__(self, hand_size: int):
        # The opening deal counts as one simultaneous draw, lowest slot first
        self.order: list[int] = list(range(hand_size))

    def vacate(self, slot: int, refill: Literal["in_place", "shift_left"] = "in_place") -> None:
        """Record that the card in ``slot`` was played or discarded.

        The slot that receives the next draw becomes the newest.
        """
        self.order.remove(slot)
        if refill == "shift_left":
            last = len(self.order)
            self.order = [s - 1 if s > slot else s for s in self.order]
            self.order.append(last)
        else:
            self.order.append(slot)

    def oldest(self, occupied: Sequence[bool]) -> int | None:
        """Least recently filled slot that still holds a card."""
        for slot in self.order:
            if slot < len(occupied) and occupied[slot]:
                return slot
        return None

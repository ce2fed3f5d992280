"""Fixed-size pools that map ids to slots, recycling the least recently used."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class _PoolItem:
    id: int = 0
    last_update: int = 0


class Pool:
    """A fixed number of id slots, each stamped with the frame it was last used."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("pool size must be positive")
        self.items = [_PoolItem() for _ in range(size)]

    def __len__(self) -> int:
        return len(self.items)

    def init(self, id_: int, frame: int) -> int:
        """Claim the least recently used slot not touched this frame for ``id_``."""
        oldest = frame
        chosen = None
        for idx, item in enumerate(self.items):
            if item.last_update < oldest:
                oldest = item.last_update
                chosen = idx
        if chosen is None:
            raise RuntimeError("pool is full")
        self.items[chosen].id = id_
        self.update(chosen, frame)
        return chosen

    def get(self, id_: int) -> int | None:
        """Return the slot index holding ``id_``, or None."""
        return next(
            (idx for idx, item in enumerate(self.items) if item.id == id_), None
        )

    def update(self, idx: int, frame: int) -> None:
        """Mark slot ``idx`` as used in ``frame``."""
        self.items[idx].last_update = frame

    def free(self, idx: int) -> None:
        """Release slot ``idx``."""
        self.items[idx] = _PoolItem()
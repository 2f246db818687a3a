"""Generational slot arena providing stable, reusable handles.

This module contains:
- SlotHandle: an opaque ``(index, generation)`` reference into an arena
- Arena[T]: slot storage that invalidates handles when slots are freed
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SlotHandle:
    """Generation-checked reference to a slot in an arena.

    Two handles are equal only if both the index and the generation match.
    A handle carries no ownership; it is only a lookup capability against the
    arena that issued it.

    Attributes:
        index: Position of the slot in the arena.
        generation: Generation of the slot at the time the handle was issued.

    """

    index: int
    generation: int

    def __str__(self) -> str:
        return f"{self.index}v{self.generation}"


@dataclass(slots=True)
class _Slot(Generic[T]):
    is_allocated: bool
    generation: int
    data: T


class Arena(Generic[T]):
    """Storage with stable handles and safe reuse of freed slots.

    Freeing a slot bumps its generation, so every handle issued before the
    removal stops resolving, even after the slot is reused for a new value.

    Example:
        >>> arena = Arena[str]()
        >>> h = arena.add("a")
        >>> arena.get(h)
        'a'
        >>> arena.remove(h)
        >>> arena.get(h) is None
        True

    """

    def __init__(self) -> None:
        self._slots: list[_Slot[T]] = []
        self._count = 0
        # Generations of slots trimmed off the tail, so a re-appended index
        # never reissues a handle that was already invalidated.
        self._retired: dict[int, int] = {}

    def count(self) -> int:
        """Return the number of allocated slots."""
        return self._count

    def add(self, data: T) -> SlotHandle:
        """Store a value and return a handle to it.

        The first free slot (lowest index) is reused with its current
        generation; if none is free a new slot is appended.

        Args:
            data: The value to store.

        Returns:
            Handle to the slot holding the value.

        """
        for index, slot in enumerate(self._slots):
            if not slot.is_allocated:
                slot.is_allocated = True
                slot.data = data
                self._count += 1
                logger.debug(f"Reusing slot {index} at generation {slot.generation}")
                return SlotHandle(index, slot.generation)

        index = len(self._slots)
        generation = self._retired.pop(index, 0)
        self._slots.append(_Slot(is_allocated=True, generation=generation, data=data))
        self._count += 1
        return SlotHandle(index, generation)

    def _resolve(self, handle: SlotHandle) -> _Slot[T] | None:
        if not 0 <= handle.index < len(self._slots):
            return None
        slot = self._slots[handle.index]
        if not slot.is_allocated or slot.generation != handle.generation:
            return None
        return slot

    def get(self, handle: SlotHandle) -> T | None:
        """Return the value behind a handle, or None if the handle is not live.

        Never raises: out-of-range and stale handles both yield None.
        """
        slot = self._resolve(handle)
        return None if slot is None else slot.data

    def get_mut(self, handle: SlotHandle) -> T | None:
        """Return the stored object behind a handle for in-place mutation.

        Same validity rule as :meth:`get`.
        """
        slot = self._resolve(handle)
        return None if slot is None else slot.data

    def remove(self, handle: SlotHandle) -> None:
        """Free the slot behind a handle, invalidating every handle to it.

        Removing the last slot also trims the run of free slots that ends
        there, stopping at the first allocated slot or at index 0.
        Out-of-range and already-removed handles are ignored.

        Args:
            handle: Handle to the slot to free.

        """
        slot = self._resolve(handle)
        if slot is None:
            logger.debug(f"Ignoring removal of dead handle {handle}")
            return

        slot.is_allocated = False
        slot.generation += 1
        self._count -= 1

        if handle.index < len(self._slots) - 1:
            return

        index = handle.index
        while index > 0 and not self._slots[index].is_allocated:
            trimmed = self._slots.pop()
            self._retired[index] = trimmed.generation
            index -= 1
        logger.debug(f"Arena trimmed to {len(self._slots)} slots")

    def handles(self) -> Iterator[SlotHandle]:
        """Iterate over handles to all allocated slots, in slot order."""
        for index, slot in enumerate(self._slots):
            if slot.is_allocated:
                yield SlotHandle(index, slot.generation)

    def __iter__(self) -> Iterator[SlotHandle]:
        return self.handles()

    def __len__(self) -> int:
        return self._count

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, SlotHandle) and self._resolve(handle) is not None

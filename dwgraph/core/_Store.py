class ValueStore:
    """Reference-counted interning table.

    Every distinct value (by equality) is stored once; all containers that
    mention the value hold the instance returned by :meth:`acquire`.

    Notes
    -
    - Values must be hashable.
    - A slot lives as long as at least one container references it.

    """

    __slots__ = ("_slots",)

    def __init__(self):
        self._slots = {}  # value -> [canonical instance, refcount]

    def acquire(self, value):
        """Return the canonical instance for ``value`` and take a reference to it."""
        slot = self._slots.get(value)
        if slot is None:
            slot = [value, 0]
            self._slots[value] = slot
        slot[1] += 1
        return slot[0]

    def release(self, value):
        """Drop one reference to ``value``; the slot disappears at zero.

        Raises
        --
        KeyError
            If ``value`` is not stored.

        """
        slot = self._slots.get(value)
        if slot is None:
            raise KeyError(f"Value {value!r} is not stored")
        slot[1] -= 1
        if slot[1] <= 0:
            del self._slots[value]

    def get(self, value, default=None):
        slot = self._slots.get(value)
        return default if slot is None else slot[0]

    def refcount(self, value) -> int:
        slot = self._slots.get(value)
        return 0 if slot is None else slot[1]

    def clear(self):
        self._slots.clear()

    def __contains__(self, value):
        return value in self._slots

    def __len__(self):
        return len(self._slots)

    def __repr__(self):
        return f"ValueStore(values={len(self._slots)})"

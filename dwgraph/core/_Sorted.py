from bisect import bisect_left, insort


class SortedSet:
    """Set of ordered values with positional access.

    Membership goes through a hash set; order is kept in a parallel list
    maintained with ``bisect``. Lookups are O(1) and positions O(log n), but
    ``add`` and ``discard`` shift the list and cost O(n).
    """

    __slots__ = ("_items", "_members")

    def __init__(self):
        self._items = []  # ascending
        self._members = set()

    def add(self, value) -> bool:
        if value in self._members:
            return False
        insort(self._items, value)  # may raise on unorderable values
        self._members.add(value)
        return True

    def discard(self, value) -> bool:
        if value not in self._members:
            return False
        self._members.discard(value)
        del self._items[bisect_left(self._items, value)]
        return True

    def index(self, value) -> int:
        """Position of ``value``; raises ``KeyError`` if absent."""
        if value not in self._members:
            raise KeyError(value)
        return bisect_left(self._items, value)

    def at(self, position):
        return self._items[position]

    def get(self, value, default=None):
        """Stored instance equal to ``value`` (or ``default``)."""
        if value not in self._members:
            return default
        return self._items[bisect_left(self._items, value)]

    def clear(self):
        self._items.clear()
        self._members.clear()

    def __contains__(self, value):
        return value in self._members

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __reversed__(self):
        return reversed(self._items)

    def __repr__(self):
        return f"SortedSet({self._items!r})"


class SortedMap:
    """Mapping whose keys are kept in ascending order, with positional access.

    Same cost model as :class:`SortedSet`: inserting or popping a key is O(n).
    """

    __slots__ = ("_keys", "_data")

    def __init__(self):
        self._keys = []  # ascending
        self._data = {}

    def setdefault(self, key, factory):
        """Return the value under ``key``, inserting ``factory()`` if missing."""
        if key in self._data:
            return self._data[key]
        insort(self._keys, key)
        value = factory()
        self._data[key] = value
        return value

    def pop(self, key):
        """Remove ``key`` and return ``(stored_key, value)``."""
        value = self._data.pop(key)
        pos = bisect_left(self._keys, key)
        stored = self._keys[pos]
        del self._keys[pos]
        return stored, value

    def index(self, key) -> int:
        """Position of ``key``; raises ``KeyError`` if absent."""
        if key not in self._data:
            raise KeyError(key)
        return bisect_left(self._keys, key)

    def key_at(self, position):
        return self._keys[position]

    def value_at(self, position):
        return self._data[self._keys[position]]

    def get(self, key, default=None):
        return self._data.get(key, default)

    def keys(self):
        return list(self._keys)

    def items(self):
        for key in self._keys:
            yield key, self._data[key]

    def clear(self):
        self._keys.clear()
        self._data.clear()

    def __getitem__(self, key):
        return self._data[key]

    def __contains__(self, key):
        return key in self._data

    def __len__(self):
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)

    def __repr__(self):
        return f"SortedMap({dict(self.items())!r})"

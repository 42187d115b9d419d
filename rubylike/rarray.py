"""A Ruby-style array of objects."""

import random

from rubylike import rstring as _rstring
from rubylike.robject import RObject


def _text(obj):
    return "" if obj is None else obj.to_string()


def _same(a, b):
    if a is None or b is None:
        return a is b
    return a.equal(b)


class RArray(RObject):
    """An ordered list of objects with Ruby-like operations."""

    def __init__(self, elements=None):
        super().__init__("Array")
        self._elements = list(elements) if elements is not None else []

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def to_string(self):
        return "[" + ", ".join(_text(e) for e in self._elements) + "]"

    def equal(self, other):
        if not isinstance(other, RArray) or len(self) != len(other):
            return False
        return all(_same(a, b) for a, b in zip(self._elements, other._elements))

    def length(self):
        return len(self._elements)

    def size(self):
        return self.length()

    def empty(self):
        return not self._elements

    def first(self):
        return self._elements[0] if self._elements else None

    def last(self):
        return self._elements[-1] if self._elements else None

    def include(self, obj):
        return any(_same(e, obj) for e in self._elements)

    def push(self, obj):
        """Append ``obj`` and return this array."""
        self._elements.append(obj)
        return self

    def pop(self):
        """Remove and return the last element, or None when empty."""
        return self._elements.pop() if self._elements else None

    def join(self, sep):
        return _rstring.RString(sep.join(_text(e) for e in self._elements))

    def map(self, fn):
        return RArray(fn(e) for e in self._elements)

    def select(self, fn):
        return RArray(e for e in self._elements if fn(e))

    def reject(self, fn):
        return RArray(e for e in self._elements if not fn(e))

    def reverse(self):
        return RArray(reversed(self._elements))

    def shuffle(self):
        return RArray(random.sample(self._elements, len(self._elements)))

    def sort(self):
        """Return a copy sorted by each element's string form."""
        return RArray(sorted(self._elements, key=_text))

    def uniq(self):
        """Return a copy without elements whose string form repeats."""
        seen = set()
        result = []
        for elem in self._elements:
            key = _text(elem)
            if key not in seen:
                seen.add(key)
                result.append(elem)
        return RArray(result)

    def get(self, index):
        """Return the element at ``index`` (negative counts from the end)."""
        if index < 0:
            index += len(self._elements)
        if 0 <= index < len(self._elements):
            return self._elements[index]
        return None

    def to_array(self):
        return list(self._elements)

    def compact(self):
        return RArray(e for e in self._elements if e is not None)

    def flatten(self):
        result = []
        for elem in self._elements:
            if isinstance(elem, RArray):
                result.extend(elem.flatten()._elements)
            else:
                result.append(elem)
        return RArray(result)

    def index(self, obj):
        return next((i for i, e in enumerate(self._elements) if _same(e, obj)), -1)

    def rindex(self, obj):
        last = len(self._elements) - 1
        return next(
            (last - i for i, e in enumerate(reversed(self._elements)) if _same(e, obj)),
            -1,
        )

    def count(self, obj):
        return sum(1 for e in self._elements if _same(e, obj))

    def any(self, fn):
        return any(fn(e) for e in self._elements)

    def all(self, fn):
        return all(fn(e) for e in self._elements)

    def none(self, fn):
        return not self.any(fn)

    def slice(self, start, end):
        """Return elements from ``start`` up to, not including, ``end``."""
        length = len(self._elements)
        if start < 0:
            start += length
        if end < 0:
            end += length
        start = max(start, 0)
        end = min(end, length)
        if start >= end:
            return RArray()
        return RArray(self._elements[start:end])

    def slice_from(self, start):
        return self.slice(start, len(self._elements))

    def take(self, n):
        if n <= 0:
            return RArray()
        return RArray(self._elements[:n])

    def drop(self, n):
        if n <= 0:
            return RArray(self._elements)
        return RArray(self._elements[n:])

    def group_by(self, fn):
        """Group elements by the string form of ``fn(element)``."""
        groups = {}
        for elem in self._elements:
            groups.setdefault(fn(elem).to_string(), []).append(elem)
        return {key: RArray(items) for key, items in groups.items()}

    def partition(self, fn):
        """Split into (matching, not matching) arrays."""
        matching, rest = [], []
        for elem in self._elements:
            (matching if fn(elem) else rest).append(elem)
        return RArray(matching), RArray(rest)

    def each(self, fn):
        for elem in self._elements:
            fn(elem)

    def each_with_index(self, fn):
        for i, elem in enumerate(self._elements):
            fn(elem, i)

    def each_cons(self, n, fn):
        """Call ``fn`` with every run of ``n`` consecutive elements."""
        if n <= 0 or n > len(self._elements):
            return
        for start in range(len(self._elements) - n + 1):
            fn(RArray(self._elements[start:start + n]))

    def each_slice(self, n, fn):
        """Call ``fn`` with successive chunks of ``n`` elements."""
        if n <= 0:
            return
        for start in range(0, len(self._elements), n):
            fn(RArray(self._elements[start:start + n]))
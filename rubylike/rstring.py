"""A Ruby-style string."""

import re

from rubylike import rarray as _rarray
from rubylike.robject import RObject

_TEMPLATE_VAR = re.compile(r"\$(?:(\$)|\{([A-Za-z0-9_]+)\}|([A-Za-z0-9_]+))")


def _expand(template, match):
    """Expand ``$1``, ``${name}`` and ``$$`` references in ``template``."""

    def resolve(var):
        if var.group(1):
            return "$"
        name = var.group(2) or var.group(3)
        key = int(name) if name.isdigit() else name
        try:
            value = match.group(key)
        except IndexError:
            return ""
        return value or ""

    return _TEMPLATE_VAR.sub(resolve, template)


def _replace_all(regex, text, template):
    parts = []
    last = 0
    prev_end = None
    for m in regex.finditer(text):
        if m.start() == m.end() and m.start() == prev_end:
            continue
        parts.append(text[last:m.start()])
        parts.append(_expand(template, m))
        last = prev_end = m.end()
    parts.append(text[last:])
    return "".join(parts)


class RString(RObject):
    """An immutable string with Ruby-like operations."""

    def __init__(self, value=""):
        super().__init__("String")
        self._value = value

    def __len__(self):
        return len(self._value)

    def to_string(self):
        return self._value

    def equal(self, other):
        return isinstance(other, RString) and self._value == other._value

    def length(self):
        return len(self._value)

    def size(self):
        return self.length()

    def empty(self):
        return self._value == ""

    def capitalize(self):
        """Upper-case the first character, leaving the rest untouched."""
        if not self._value:
            return self
        return RString(self._value[0].upper() + self._value[1:])

    def downcase(self):
        return RString(self._value.lower())

    def upcase(self):
        return RString(self._value.upper())

    def strip(self):
        return RString(self._value.strip())

    def chomp(self):
        return RString(self._value.rstrip("\r\n"))

    def include(self, substr):
        return substr in self._value

    def split(self, sep):
        parts = list(self._value) if sep == "" else self._value.split(sep)
        return _rarray.RArray(RString(p) for p in parts)

    def starts_with(self, prefix):
        return self._value.startswith(prefix)

    def ends_with(self, suffix):
        return self._value.endswith(suffix)

    def reverse(self):
        return RString(self._value[::-1])

    def replace_all(self, old, new):
        return RString(self._value.replace(old, new))

    def match(self, pattern):
        """Return True if ``pattern`` matches anywhere; False if it is invalid."""
        try:
            return re.search(pattern, self._value) is not None
        except re.error:
            return False

    def gsub(self, pattern, repl):
        """Replace every match; ``repl`` may use ``$1`` style references."""
        try:
            regex = re.compile(pattern)
        except re.error:
            return self
        return RString(_replace_all(regex, self._value, repl))

    def count(self, substr):
        return self._value.count(substr)

    def index(self, substr):
        """Return the character position of ``substr``, or -1."""
        return self._value.find(substr)

    def rindex(self, substr):
        """Return the last character position of ``substr``, or -1."""
        return self._value.rfind(substr)

    def slice(self, start, end):
        length = len(self._value)
        if start < 0:
            start += length
        if end < 0:
            end += length
        start = max(start, 0)
        end = min(end, length)
        if start > end or start >= length:
            return RString("")
        return RString(self._value[start:end])

    def slice_from(self, start):
        length = len(self._value)
        if start < 0:
            start += length
        start = max(start, 0)
        if start >= length:
            return RString("")
        return RString(self._value[start:])

    def concat(self, other):
        return RString(self._value + other.to_string())

    def center(self, width, pad=" "):
        length = len(self._value)
        if length >= width:
            return self
        left = (width - length) // 2
        right = width - length - left
        return RString(pad * left + self._value + pad * right)

    def ljust(self, width, pad=" "):
        length = len(self._value)
        if length >= width:
            return self
        return RString(self._value + pad * (width - length))

    def rjust(self, width, pad=" "):
        length = len(self._value)
        if length >= width:
            return self
        return RString(pad * (width - length) + self._value)

    def sub(self, pattern, repl):
        """Replace the first match of ``pattern``."""
        try:
            regex = re.compile(pattern)
        except re.error:
            return self
        found = regex.search(self._value)
        if found is None:
            return self
        start, end = found.span()
        middle = _replace_all(regex, self._value[start:end], repl)
        return RString(self._value[:start] + middle + self._value[end:])

    def ord(self):
        """Return the code point of the first character."""
        if not self._value:
            raise ValueError("empty string has no character code")
        return ord(self._value[0])

    def chars(self):
        return _rarray.RArray(RString(c) for c in self._value)

    def each(self, fn):
        for char in self._value:
            fn(RString(char))

    def each_line(self, fn):
        for line in self._value.split("\n"):
            fn(RString(line))

    def times(self, n):
        return RString(self._value * n if n > 0 else "")

    def to_int(self):
        """Return the position of the first digit after stripping, or -1."""
        text = self._value.strip()
        return next((i for i, c in enumerate(text) if c in "0123456789"), -1)

    def inspect(self):
        return '"' + self._value + '"'

    def swap_case(self):
        def swap(char):
            if char.isupper():
                return char.lower()
            if char.islower():
                return char.upper()
            return char

        return RString("".join(swap(c) for c in self._value))

    def to_camel_case(self):
        first, *rest = self._value.split("_")
        return RString(first + "".join(w[:1].upper() + w[1:] for w in rest))

    def to_snake_case(self):
        result = []
        previous = ""
        for char in self._value:
            if char.isupper():
                if previous and not previous.isupper():
                    result.append("_")
                result.append(char.lower())
            else:
                result.append(char)
            previous = char
        return RString("".join(result))
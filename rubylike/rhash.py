"""A Ruby-style hash table."""

import json
import math
import sys
from decimal import Decimal

import yaml

from rubylike.rarray import RArray
from rubylike.robject import RObject
from rubylike.rstring import RString

HASH_CLASS = "Hash"

_XML_ESCAPES = str.maketrans({
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
})

_JSON_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _format_float(number):
    """Format a float as the shortest ``%g``-style text."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(number)).as_tuple()
    point = len(digit_tuple) + exponent
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    prefix = "-" if sign else ""
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return prefix + digits + "0" * (point - len(digits))
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _sort_key(key):
    if isinstance(key, bool):
        return (0, int(key), "")
    if isinstance(key, (int, float)):
        return (1, key, "")
    if isinstance(key, str):
        return (2, 0, key)
    return (3, 0, _format(key))


def _format_map(mapping):
    pairs = sorted(mapping.items(), key=lambda item: _sort_key(item[0]))
    return "map[" + " ".join(f"{_format(k)}:{_format(v)}" for k, v in pairs) + "]"


def _format(value):
    """Return the default textual form of a value."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, RObject):
        return value.to_string()
    if isinstance(value, dict):
        return _format_map(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format(v) for v in value) + "]"
    return str(value)


def _xml_escape(text):
    return text.translate(_XML_ESCAPES)


def _xml_values(value):
    if value is None:
        return []
    if isinstance(value, dict):
        raise TypeError("mappings cannot be written as XML values")
    if isinstance(value, (list, tuple)):
        return [_format(item) for item in value]
    return [_format(value)]


def _csv_field(field):
    needs_quotes = (
        field == "\\."
        or any(c in field for c in ',"\r\n')
        or (field != "" and field[0].isspace())
    )
    if not needs_quotes:
        return field
    return '"' + field.replace('"', '""') + '"'


class RHash(RObject):
    """A mutable key/value table with Ruby-like operations."""

    __hash__ = None

    def __init__(self, mapping=None):
        super().__init__(HASH_CLASS)
        self._data = mapping if mapping is not None else {}
        self._default = None
        self._default_proc = None
        self._by_identity = True

    def __len__(self):
        return len(self._data)

    def __contains__(self, key):
        return key in self._data

    def _entries(self):
        """Pairs of (key text, value), sorted by key text."""
        return sorted(((_format(k), v) for k, v in self._data.items()),
                      key=lambda pair: pair[0])

    def _string_keyed(self):
        return {_format(k): v for k, v in self._data.items()}

    def get(self, key):
        """Return the value for ``key``, or None when it is absent."""
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def delete(self, key):
        """Remove ``key`` and return its value, or None when it was absent."""
        return self._data.pop(key, None)

    def size(self):
        return len(self._data)

    def keys(self):
        """Return the text form of every key, sorted."""
        return sorted(_format(k) for k in self._data)

    def values(self):
        return list(self._data.values())

    def clear(self):
        self._data = {}

    def has_key(self, key):
        return key in self._data

    def has_value(self, value):
        return any(v == value for v in self._data.values())

    def merge(self, other):
        """Return a new hash with the entries of both; ``other`` wins."""
        return RHash({**self._data, **other._data})

    def merge_bang(self, other):
        """Merge ``other`` into this hash in place."""
        self._data.update(other._data)

    def to_string(self):
        return _format_map(self._data)

    def inspect(self):
        return self.to_string()

    def each(self, fn):
        for key, value in list(self._data.items()):
            fn(key, value)

    def select(self, fn):
        return RHash({k: v for k, v in self._data.items() if fn(k, v)})

    def reject(self, fn):
        return RHash({k: v for k, v in self._data.items() if not fn(k, v)})

    def transform_keys(self, fn):
        return RHash({fn(k): v for k, v in self._data.items()})

    def transform_values(self, fn):
        return RHash({k: fn(v) for k, v in self._data.items()})

    def fetch(self, key, *args):
        """Return the value for ``key``, else the default, else raise KeyError."""
        if key in self._data:
            return self._data[key]
        if args:
            return args[0]
        raise KeyError(f"key not found: {_format(key)}")

    def default(self):
        """Return the hash's default value (always None)."""
        return self._default

    def default_proc(self):
        """Return the hash's default procedure (always None)."""
        return self._default_proc

    def compare_by_identity(self):
        """Mark the hash as comparing keys by identity, which it always does."""
        self._by_identity = True

    def compare_by_identity_q(self):
        return self._by_identity

    def to_a(self):
        """Return an array of [key, value] string pairs."""
        return RArray(
            RArray([RString(_format(k)), RString(_format(v))])
            for k, v in self._data.items()
        )

    def to_h(self):
        """Return a hash backed by the same mapping."""
        return RHash(self._data)

    def to_s(self):
        return RString(self.to_string())

    def to_proc(self):
        """Return a function that looks up a key, giving None when absent."""
        return self._data.get

    def to_json(self):
        try:
            text = json.dumps(self._string_keyed(), sort_keys=True,
                              separators=(",", ":"), ensure_ascii=False,
                              allow_nan=False)
        except (TypeError, ValueError):
            return RString("{}")
        for raw, escaped in _JSON_ESCAPES:
            text = text.replace(raw, escaped)
        return RString(text)

    def to_yaml(self):
        try:
            text = yaml.safe_dump(self._string_keyed(), sort_keys=True,
                                  default_flow_style=False, allow_unicode=True,
                                  width=sys.maxsize)
        except yaml.YAMLError:
            return RString("{}")
        return RString(text)

    def to_xml(self):
        entries = self._entries()
        if not entries:
            return RString("<hash></hash>")
        lines = ["<hash>"]
        try:
            for key, value in entries:
                lines.append("  <entry>")
                lines.append(f"    <key>{_xml_escape(key)}</key>")
                lines.extend(f"    <value>{_xml_escape(text)}</value>"
                             for text in _xml_values(value))
                lines.append("  </entry>")
        except TypeError:
            return RString("<hash></hash>")
        lines.append("</hash>")
        return RString("\n".join(lines))

    def to_html(self):
        parts = ['<div class="hash">\n']
        for key, value in self._entries():
            parts.append('  <div class="entry">\n')
            parts.append(f'    <span class="key">{key}</span>\n')
            parts.append(f'    <span class="value">{_format(value)}</span>\n')
            parts.append("  </div>\n")
        parts.append("</div>")
        return RString("".join(parts))

    def to_csv(self):
        rows = [("key", "value")]
        rows.extend((key, _format(value)) for key, value in self._entries())
        text = "".join(",".join(_csv_field(f) for f in row) + "\n" for row in rows)
        return RString(text.strip())

    def to_tsv(self):
        lines = ["key\tvalue\n"]
        lines.extend(f"{key}\t{_format(value)}\n" for key, value in self._entries())
        return RString("".join(lines).strip())

    def equal(self, other):
        return isinstance(other, RHash) and self._data == other._data
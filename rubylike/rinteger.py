"""A Ruby-style integer."""

import math
import re
from fractions import Fraction

from rubylike.rarray import RArray
from rubylike.robject import RObject
from rubylike.rstring import RString

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(1 << 63)
_INT_MAX = (1 << 63) - 1
_INT_BYTES = 8
_REPLACEMENT_CHAR = "\ufffd"


def _check_divisor(divisor):
    if divisor == 0:
        raise ZeroDivisionError("division by zero")


def _trunc_div(a, b):
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _trunc_mod(a, b):
    """Remainder that takes the sign of the dividend."""
    return a - b * _trunc_div(a, b)


def _power(base, exponent):
    return int(math.pow(base, exponent))


def _format_base(value, base):
    if value == 0:
        return "0"
    n = abs(value)
    digits = []
    while n:
        n, rest = divmod(n, base)
        digits.append(_DIGITS[rest])
    if value < 0:
        digits.append("-")
    return "".join(reversed(digits))


class RInteger(RObject):
    """An immutable integer with Ruby-like operations."""

    def __init__(self, value=0):
        super().__init__("Integer")
        self._value = int(value)

    @property
    def value(self):
        """The underlying Python integer."""
        return self._value

    def __int__(self):
        return self._value

    def to_string(self):
        return str(self._value)

    def equal(self, other):
        return isinstance(other, RInteger) and self._value == other._value

    # Arithmetic

    def add(self, other):
        return RInteger(self._value + other)

    def add_rint(self, other):
        return RInteger(self._value + other.value)

    def sub(self, other):
        return RInteger(self._value - other)

    def sub_rint(self, other):
        return RInteger(self._value - other.value)

    def mul(self, other):
        return RInteger(self._value * other)

    def mul_rint(self, other):
        return RInteger(self._value * other.value)

    def div(self, other):
        """Divide, rounding toward zero."""
        _check_divisor(other)
        return RInteger(_trunc_div(self._value, other))

    def div_rint(self, other):
        return self.div(other.value)

    def mod(self, other):
        """Remainder with the sign of the dividend."""
        _check_divisor(other)
        return RInteger(_trunc_mod(self._value, other))

    def mod_rint(self, other):
        return self.mod(other.value)

    def modulo(self, other):
        return self.mod(other)

    def modulo_rint(self, other):
        return self.mod_rint(other)

    def pow(self, exponent):
        """Raise to ``exponent`` through floating point, truncating the result."""
        return RInteger(_power(self._value, exponent))

    def pow_rint(self, exponent):
        return self.pow(exponent.value)

    # Bit operations

    def bit_and(self, other):
        return RInteger(self._value & other.value)

    def bit_or(self, other):
        return RInteger(self._value | other.value)

    def bit_xor(self, other):
        return RInteger(self._value ^ other.value)

    def bit_not(self):
        return RInteger(~self._value)

    def left_shift(self, count):
        if count.value < 0:
            return RInteger(0)
        return RInteger(self._value << count.value)

    def right_shift(self, count):
        if count.value < 0:
            return RInteger(-1 if self._value < 0 else 0)
        return RInteger(self._value >> count.value)

    def bit_at(self, pos):
        if pos.value < 0:
            return RInteger(0)
        return RInteger((self._value >> pos.value) & 1)

    def all_bits(self, mask):
        return (self._value & mask.value) == mask.value

    def any_bits(self, mask):
        return (self._value & mask.value) != 0

    def no_bits(self, mask):
        return (self._value & mask.value) == 0

    def bit_length(self):
        if self._value == 0:
            return 0
        magnitude = self._value if self._value > 0 else -self._value - 1
        return magnitude.bit_length() if magnitude > 0 else 1

    # Predicates and number theory

    def abs(self):
        return RInteger(abs(self._value)) if self._value < 0 else self

    def even(self):
        return self._value % 2 == 0

    def odd(self):
        return self._value % 2 != 0

    def zero(self):
        return self._value == 0

    def positive(self):
        return self._value > 0

    def negative(self):
        return self._value < 0

    def gcd(self, other):
        return RInteger(math.gcd(self._value, other.value))

    def lcm(self, other):
        if self._value == 0 or other.value == 0:
            return RInteger(0)
        divisor = self.gcd(other).value
        return RInteger((abs(self._value) // divisor) * abs(other.value))

    def gcd_lcm(self, other):
        return RArray([self.gcd(other), self.lcm(other)])

    def div_mod(self, other):
        """Return [quotient, remainder] with truncating division."""
        _check_divisor(other.value)
        return RArray([
            RInteger(_trunc_div(self._value, other.value)),
            RInteger(_trunc_mod(self._value, other.value)),
        ])

    def ceil_div(self, other):
        _check_divisor(other.value)
        if (self._value < 0) != (other.value < 0):
            return RInteger(_trunc_div(self._value, other.value))
        return RInteger(_trunc_div(self._value + other.value - 1, other.value))

    # Rounding

    def ceil(self):
        return self

    def ceil_with_precision(self, digits):
        if digits.value >= 0:
            return self
        step = 10 ** -digits.value
        remainder = _trunc_mod(self._value, step)
        if remainder > 0:
            return RInteger(self._value + (step - remainder))
        if remainder < 0:
            return RInteger(self._value - remainder)
        return self

    def floor(self):
        return self

    def floor_with_precision(self, digits):
        if digits.value >= 0:
            return self
        step = 10 ** -digits.value
        remainder = _trunc_mod(self._value, step)
        if remainder > 0:
            return RInteger(self._value - remainder)
        if remainder < 0:
            return RInteger(self._value - (remainder + step))
        return self

    def round(self):
        return self

    def round_with_precision(self, digits):
        if digits.value >= 0:
            return self
        step = 10 ** -digits.value
        half = step // 2
        remainder = _trunc_mod(self._value, step)
        if remainder >= half:
            return RInteger(self._value + (step - remainder))
        if remainder <= -half:
            return RInteger(self._value - (remainder + step))
        return RInteger(self._value - remainder)

    def truncate(self):
        return self

    def truncate_with_precision(self, digits):
        if digits.value >= 0:
            return self
        step = 10 ** -digits.value
        return RInteger(self._value - _trunc_mod(self._value, step))

    # Sequencing

    def succ(self):
        return RInteger(self._value + 1)

    def next(self):
        return self.succ()

    def pred(self):
        return RInteger(self._value - 1)

    def times(self, fn):
        """Call ``fn`` with 0, 1, ... up to but not including this value."""
        for j in range(self._value):
            fn(RInteger(j))

    def up_to(self, limit, fn):
        for j in range(self._value, limit.value + 1):
            fn(RInteger(j))

    def down_to(self, limit, fn):
        for j in range(self._value, limit.value - 1, -1):
            fn(RInteger(j))

    # Conversions

    def to_rstring(self):
        return RString(self.to_string())

    def to_int(self):
        return self

    def to_integer(self):
        return self

    def to_float(self):
        return float(self._value)

    def to_rational(self):
        return Fraction(self._value)

    def fdiv(self, other):
        _check_divisor(other.value)
        return self._value / other.value

    def to_hex(self):
        return RString(format(self._value, "x"))

    def to_oct(self):
        return RString(format(self._value, "o"))

    def to_bin(self):
        return RString(format(self._value, "b"))

    def to_base(self, base):
        if not 2 <= base.value <= 36:
            raise ValueError("base must be between 2 and 36")
        return RString(_format_base(self._value, base.value))

    def digits(self, base=10):
        """Return the digits, least significant first."""
        if base < 2:
            raise ValueError("base must be at least 2")
        if self._value == 0:
            return RArray([RInteger(0)])
        n = abs(self._value)
        result = []
        while n > 0:
            n, digit = divmod(n, base)
            result.append(RInteger(digit))
        return RArray(result)

    def chr(self):
        value = self._value
        if 0 <= value <= 0x10FFFF and not 0xD800 <= value <= 0xDFFF:
            return RString(chr(value))
        return RString(_REPLACEMENT_CHAR)

    def ord(self):
        return self

    def size(self):
        """Return the byte size of a machine integer."""
        return _INT_BYTES

    def coerce(self, other):
        """Return [other, self] with ``other`` turned into an integer."""
        if isinstance(other, RInteger):
            return RArray([other, self])
        if isinstance(other, RString):
            text = other.to_string()
            if _DECIMAL.fullmatch(text):
                parsed = int(text)
                if _INT_MIN <= parsed <= _INT_MAX:
                    return RArray([RInteger(parsed), self])
        raise TypeError("cannot coerce to a compatible type")
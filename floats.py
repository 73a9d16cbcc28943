#!/usr/bin/env python3
#
# binary64 number type whose arithmetic runs through the bit level simulator

import numpy as np
import float_utils as fl
import arith
from codec import unpack, is_zero

class binary64:
    """
    Immutable binary64 value. The bit pattern is the value; + - * / are
    computed by arith.compute() instead of the host FPU and the step tags
    of the producing operation are kept in .steps.

    binary64(0.1)                   from a host float (or int, np.floating)
    binary64(bits=0x3FB999999999999A) from a bit pattern
    """
    def __init__(self, f=0.0, bits=None, steps=()):
        if bits is None:
            if isinstance(f, binary64):
                bits = f.bits
            else:
                try:
                    x = np.float64(f)
                except OverflowError:
                    # ints beyond the binary64 range round to infinity
                    x = np.float64(np.inf if f > 0 else -np.inf)
                bits = fl.double2bits(x)
        if bits < 0 or bits >> 64:
            raise ValueError('not a 64-bit pattern: {0}'.format(bits))
        self._bits = bits
        self._steps = tuple(steps)

    @property
    def bits(self):
        return self._bits

    @property
    def steps(self):
        return list(self._steps)

    @property
    def bin(self):
        return fl.spaced64(self._bits)

    @property
    def hex(self):
        return '0x{0:016X}'.format(self._bits)

    def isnan(self):
        return unpack(self._bits).is_nan

    def isinf(self):
        return unpack(self._bits).is_inf

    def __str__(self):
        return str(float(self))

    def __repr__(self):
        return 'binary64({0!r})'.format(float(self))

    # if casted via float(obj)
    def __float__(self):
        return fl.bits2double(self._bits)

    # equal to hash(float) so binary64 and float keys mix, a NaN never equals anything
    def __hash__(self):
        if self.isnan():
            return hash(self._bits)
        return hash(float(self))

    def iszero(self):
        return is_zero(unpack(self._bits))

    def op(self, op, other, reflected=False):
        o = self.rtype(other)
        if o is None:
            return NotImplemented
        a, b = (o, self) if reflected else (self, o)
        res, steps = arith.compute(op, a.bits, b.bits)
        return binary64(bits=res, steps=steps)

    def __add__(self, other):
        return self.op(arith.ADD_OP, other)

    def __radd__(self, other):
        return self.op(arith.ADD_OP, other, True)

    def __sub__(self, other):
        return self.op(arith.SUB_OP, other)

    def __rsub__(self, other):
        return self.op(arith.SUB_OP, other, True)

    def __mul__(self, other):
        return self.op(arith.MUL_OP, other)

    def __rmul__(self, other):
        return self.op(arith.MUL_OP, other, True)

    def __truediv__(self, other):
        return self.op(arith.DIV_OP, other)

    def __rtruediv__(self, other):
        return self.op(arith.DIV_OP, other, True)

    def __neg__(self):
        return binary64(bits=self._bits ^ (1 << 63))

    def __pos__(self):
        return self

    def __abs__(self):
        return binary64(bits=self._bits & ~(1 << 63))

    """
    Comparisons follow IEEE754: NaN is unordered (every comparison but !=
    is False) and +0 == -0. Ordering works on the patterns directly: for
    non-negative values a larger pattern is a larger number, for negative
    values it is the other way round.
    """
    def key(self):
        if self.iszero():
            return 0
        if self._bits >> 63:
            return -(self._bits & ~(1 << 63))
        return self._bits

    def compare(self, other):
        o = self.rtype(other)
        if o is None:
            return None
        if self.isnan() or o.isnan():
            return 'unordered'
        a, b = self.key(), o.key()
        return (a > b) - (a < b)

    def __eq__(self, other):
        c = self.compare(other)
        if c is None:
            return NotImplemented
        return c == 0

    def __ne__(self, other):
        c = self.compare(other)
        if c is None:
            return NotImplemented
        return c != 0

    def __lt__(self, other):
        c = self.compare(other)
        if c is None:
            return NotImplemented
        return c != 'unordered' and c < 0

    def __le__(self, other):
        c = self.compare(other)
        if c is None:
            return NotImplemented
        return c != 'unordered' and c <= 0

    def __gt__(self, other):
        c = self.compare(other)
        if c is None:
            return NotImplemented
        return c != 'unordered' and c > 0

    def __ge__(self, other):
        c = self.compare(other)
        if c is None:
            return NotImplemented
        return c != 'unordered' and c >= 0

    def rtype(self, other):
        if isinstance(other, binary64):
            return other
        elif isinstance(other, (float, int, np.floating, np.integer)) and not isinstance(other, bool):
            return binary64(other)
        else:
            return None

# range limits, as in np.finfo(np.float64)
binary64.max = binary64(fl.highest_number(fl.EXP_BITS, fl.FRAC_BITS))
binary64.tiny = binary64(fl.lowest_regular_number(fl.EXP_BITS))
binary64.smallest_subnormal = binary64(fl.lowest_subnormal_number(fl.EXP_BITS, fl.FRAC_BITS))

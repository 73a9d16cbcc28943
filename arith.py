#!/usr/bin/env python3
#
# binary64 add, sub, mul and div on bit patterns, using integer operations only
# every function takes two 64-bit patterns and returns one, steps collects the tags

from float_utils import EXT_BITS, WORK_PRECISION
from codec import unpack, pack, widen, is_zero, set_sign, signed_zero, signed_inf, shift_right_sticky
from codec import QNAN, ALIGN, ADD, SUB_A_GT_B, SUB_B_GT_A

ADD_OP, SUB_OP, MUL_OP, DIV_OP = 'add', 'sub', 'mul', 'div'
OPS = (ADD_OP, SUB_OP, MUL_OP, DIV_OP)

OP_NAMES = {
    'add': ADD_OP, '+': ADD_OP,
    'sub': SUB_OP, 'subtract': SUB_OP, '-': SUB_OP,
    'mul': MUL_OP, 'multiply': MUL_OP, '*': MUL_OP, 'x': MUL_OP,
    'div': DIV_OP, 'divide': DIV_OP, '/': DIV_OP,
}

EXT_WIDTH = WORK_PRECISION + EXT_BITS # 56, [main53 | grs]
DIV_HEADROOM = WORK_PRECISION + EXT_BITS + 3 # 59

def parse_op(name):
    try:
        return OP_NAMES[name.strip().lower()]
    except KeyError:
        raise ValueError('unknown operator {0!r}, expected one of {1}'.format(name, ', '.join(OPS)))

def specials_add(A, B):
    if A.is_nan or B.is_nan:
        return QNAN
    if A.is_inf and B.is_inf:
        if A.sign == B.sign:
            return signed_inf(A.sign)
        return QNAN
    if A.is_inf:
        return signed_inf(A.sign)
    if B.is_inf:
        return signed_inf(B.sign)
    return None

def specials_mul(A, B):
    sign = A.sign ^ B.sign
    if A.is_nan or B.is_nan:
        return QNAN
    a_zero, b_zero = is_zero(A), is_zero(B)
    if (A.is_inf and b_zero) or (B.is_inf and a_zero):
        return QNAN
    if A.is_inf or B.is_inf:
        return signed_inf(sign)
    if a_zero or b_zero:
        return signed_zero(sign)
    return None

def specials_div(A, B):
    sign = A.sign ^ B.sign
    if A.is_nan or B.is_nan:
        return QNAN
    a_zero, b_zero = is_zero(A), is_zero(B)
    if A.is_inf and B.is_inf:
        return QNAN
    if a_zero and b_zero:
        return QNAN
    if A.is_inf:
        return signed_inf(sign)
    if B.is_inf:
        return signed_zero(sign)
    if b_zero:
        return signed_inf(sign)
    if a_zero:
        return signed_zero(sign)
    return None

# reduces a wide significand to [main53 | grs], everything below the round bit
# ends up in sticky; returns the shift so the caller can move the exponent along
def reduce_to_ext(x):
    shift = x.bit_length() - EXT_WIDTH
    if shift <= 0:
        return x, 0
    return shift_right_sticky(x, shift), shift

"""
Addition and subtraction share one path: subtraction flips the sign of B.
 - the mantissas get 3 extra bits for guard/round/sticky
 - the operand with the smaller exponent is shifted right (sticky) until
   both exponents are equal
 - same signs add magnitudes, different signs subtract the smaller from
   the larger magnitude, equal magnitudes cancel to +0
"""
def add_or_sub(a, b, subtract=False, steps=None):
    if steps is None:
        steps = []
    A = unpack(a)
    B = unpack(b)
    if subtract:
        B.sign ^= 1

    sp = specials_add(A, B)
    if sp is not None:
        return sp

    if is_zero(A):
        return set_sign(b, B.sign)
    if is_zero(B):
        return set_sign(a, A.sign)

    eA, mA = widen(A)
    eB, mB = widen(B)
    exp = max(eA, eB)
    aAcc = shift_right_sticky(mA << EXT_BITS, exp - eA)
    bAcc = shift_right_sticky(mB << EXT_BITS, exp - eB)
    steps.append(ALIGN)

    if A.sign == B.sign:
        res = aAcc + bAcc
        sign = A.sign
        steps.append(ADD)
    elif aAcc == bAcc:
        # exact cancellation is +0 whatever the operand signs
        return signed_zero(0)
    elif aAcc > bAcc:
        res = aAcc - bAcc
        sign = A.sign
        steps.append(SUB_A_GT_B)
    else:
        res = bAcc - aAcc
        sign = B.sign
        steps.append(SUB_B_GT_A)

    return pack(sign, exp, res, steps)

def add(a, b, steps=None):
    return add_or_sub(a, b, False, steps)

def sub(a, b, steps=None):
    return add_or_sub(a, b, True, steps)

"""
53 x 53 -> up to 106 bit product. The product of two 1.x mantissas is
prod * 2^(eA + eB - 104); cutting it down to 56 bits by a shift of s gives
ext * 2^(eA + eB - 104 + s), i.e. exponent eA + eB - 49 + s in pack's
convention of ext * 2^(exp - 55).
"""
def multiply(a, b, steps=None):
    if steps is None:
        steps = []
    A = unpack(a)
    B = unpack(b)

    sp = specials_mul(A, B)
    if sp is not None:
        return sp

    sign = A.sign ^ B.sign
    eA, mA = widen(A)
    eB, mB = widen(B)

    prod = mA * mB
    ext, s = reduce_to_ext(prod)
    exp = eA + eB - 2*(WORK_PRECISION - 1) + (EXT_WIDTH - 1) + s

    return pack(sign, exp, ext, steps)

"""
Fixed point long division: the dividend is shifted left by 59 bits of
headroom, so the quotient of two 53 bit mantissas has 59 or 60 bits, which
is enough for the 53 main bits and guard/round/sticky. A non-zero
remainder sets sticky.
"""
def divide(a, b, steps=None):
    if steps is None:
        steps = []
    A = unpack(a)
    B = unpack(b)

    sp = specials_div(A, B)
    if sp is not None:
        return sp

    sign = A.sign ^ B.sign
    eA, mA = widen(A)
    eB, mB = widen(B)

    q, r = divmod(mA << DIV_HEADROOM, mB)
    if r:
        q |= 1
    ext, s = reduce_to_ext(q)
    exp = eA - eB - DIV_HEADROOM + (EXT_WIDTH - 1) + s

    return pack(sign, exp, ext, steps)

FUNCS = {
    ADD_OP: add,
    SUB_OP: sub,
    MUL_OP: multiply,
    DIV_OP: divide,
}

def compute(op, a, b):
    """Runs op on the patterns a and b, returns (result bits, step tags)."""
    if op not in FUNCS:
        op = parse_op(op)
    for x in (a, b):
        if x < 0 or x >> 64:
            raise ValueError('not a 64-bit pattern: {0}'.format(x))
    steps = []
    res = FUNCS[op](a, b, steps)
    return res, steps

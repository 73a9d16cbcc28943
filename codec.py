#!/usr/bin/env python3
#
# binary64 field codec: unpack a 64-bit pattern into sign/exponent/significand
# and pack an extended significand back, rounding to nearest, ties to even

from float_utils import FRAC_BITS, EXP_BIAS, EXP_MAX, WORK_PRECISION, EXT_BITS

FRAC_MASK = (1 << FRAC_BITS) - 1
HIDDEN_BIT = 1 << FRAC_BITS
GRS_MASK = (1 << EXT_BITS) - 1
TOP_BIT = FRAC_BITS + EXT_BITS # 55, position of the leading 1 in a normalized extended significand

QNAN = 0x7FF8000000000000

# step tags, the complete vocabulary handed to the narration layer
ALIGN = 'align'
ADD = 'add'
SUB_A_GT_B = 'sub(A>B)'
SUB_B_GT_A = 'sub(B>A)'
ROUND_CARRY = 'round:carry'
ROUND_KEEP = 'round:keep'

def normalize_left(n):
    return 'normalize:left({0})'.format(n)

def normalize_right(n):
    return 'normalize:right({0})'.format(n)

class Unpacked:
    """
    Transient field view of a binary64 pattern.
     sign:   0 or 1
     exp:    unbiased exponent, 1-bias for subnormals
     mant:   53 bits (1.ffff) for normals, up to 52 bits (0.ffff) for subnormals
     is_sub, is_inf, is_nan: class flags, zero is a subnormal with mant == 0
    exp and mant are 0 and carry no meaning for infinities and NaNs.
    """
    def __init__(self, sign, exp=0, mant=0, is_sub=False, is_inf=False, is_nan=False):
        self.sign = sign
        self.exp = exp
        self.mant = mant
        self.is_sub = is_sub
        self.is_inf = is_inf
        self.is_nan = is_nan

    def __repr__(self):
        if self.is_nan:
            return 'Unpacked(NaN)'
        if self.is_inf:
            return 'Unpacked({0}Inf)'.format('-' if self.sign else '+')
        return 'Unpacked(sign={0}, exp={1}, mant={2:#x}, is_sub={3})'.format(self.sign, self.exp, self.mant, self.is_sub)

def unpack(bits):
    sign = (bits >> 63) & 1
    e = (bits >> FRAC_BITS) & EXP_MAX
    f = bits & FRAC_MASK

    if e == EXP_MAX:
        return Unpacked(sign, is_inf=(f == 0), is_nan=(f != 0))
    if e == 0:
        return Unpacked(sign, 1 - EXP_BIAS, f, is_sub=True)
    return Unpacked(sign, e - EXP_BIAS, HIDDEN_BIT | f)

def is_zero(u):
    return u.is_sub and u.mant == 0

def make_bits(sign, field, frac):
    # addition, so a fraction that rounded up to 1 << 52 carries into the exponent field
    return (sign << 63) + (field << FRAC_BITS) + frac

def signed_zero(sign):
    return make_bits(sign, 0, 0)

def signed_inf(sign):
    return make_bits(sign, EXP_MAX, 0)

def set_sign(bits, sign):
    return (bits & ~(1 << 63)) | (sign << 63)

def widen(u):
    """
    Returns (exp, mant) with mant brought to the full working precision of 53 bits.
    Normals are returned as they are, subnormals are shifted left and the
    exponent is lowered by the same amount, so the value stays the same.
    """
    shift = WORK_PRECISION - u.mant.bit_length()
    if shift <= 0:
        return u.exp, u.mant
    return u.exp - shift, u.mant << shift

def shift_right_sticky(x, k):
    """
    Right shift by k, any 1 that falls off is folded into the lsb (sticky).
    k <= 0 is a no-op.
    """
    if k <= 0:
        return x
    main = x >> k
    if x & ((1 << k) - 1):
        main |= 1
    return main

def round_nearest_even(main, guard, rnd, sticky):
    if guard and (rnd or sticky or (main & 1)):
        return main + 1, True
    return main, False

"""
Pack sign, unbiased exponent and an extended significand into a binary64 pattern.

ext holds [main | g r s], its value is ext * 2^(exp - 55):

    ext = 1mmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmmm grs
          └────────────────────── 53 main ───────────────────┘ └┬┘
                                                            guard/round/sticky

 1. main == 0                  -> signed zero
 2. normalize leading 1 to bit 55, exp follows the shift
 3. round to nearest, ties to even; carry out of 53 bits -> shift right, exp++
 4. exp + bias >= 2047         -> signed infinity
    exp + bias <= 0            -> subnormal, shift right by k = 1 - (exp + bias)
                                  and round a second time on the lost bits,
                                  k >= 53 underflows to signed zero
    otherwise                  -> normal, low 52 bits are the fraction

steps, when given, collects the normalize and round tags.
"""
def pack(sign, exp, ext, steps=None):
    if steps is None:
        steps = []
    if ext >> EXT_BITS == 0:
        return signed_zero(sign)

    shift = (ext.bit_length() - 1) - TOP_BIT
    if shift > 0:
        ext = shift_right_sticky(ext, shift)
        exp += shift
        steps.append(normalize_right(shift))
    elif shift < 0:
        ext <<= -shift
        exp += shift
        steps.append(normalize_left(-shift))

    main = ext >> EXT_BITS
    grs = ext & GRS_MASK
    main, inc = round_nearest_even(main, grs & 0b100, grs & 0b010, grs & 0b001)
    if not inc:
        steps.append(ROUND_KEEP)
    elif main.bit_length() > WORK_PRECISION:
        main >>= 1
        exp += 1
        steps.append(ROUND_CARRY)

    field = exp + EXP_BIAS
    if field >= EXP_MAX:
        return signed_inf(sign)
    if field <= 0:
        k = 1 - field
        if k >= WORK_PRECISION:
            return signed_zero(sign)
        lost = main & ((1 << k) - 1)
        main >>= k
        g = (lost >> (k - 1)) & 1
        r = (lost >> (k - 2)) & 1 if k >= 2 else 0
        s = 1 if k >= 3 and lost & ((1 << (k - 2)) - 1) else 0
        main, _ = round_nearest_even(main, g, r, s)
        return make_bits(sign, 0, main)

    return make_bits(sign, field, main & FRAC_MASK)

#!/usr/bin/env python3
#
# binary64 format constants and boundary helpers:
# text <-> bit pattern, display formatting and host float conversions

import bitstring # BitArray()
import numpy as np # np.float64

def exponent_bias(exp_bits):
    return 2**(exp_bits -1) -1

EXP_BITS  = 11
FRAC_BITS = 52
EXP_BIAS  = exponent_bias(EXP_BITS) # 1023
EXP_MAX   = (1 << EXP_BITS) - 1     # 0x7FF

# working precision: hidden 1 + 52 fraction bits, plus guard, round and sticky
WORK_PRECISION = FRAC_BITS + 1
EXT_BITS = 3

# boundary error kinds
MALFORMED_BIT_PATTERN = 'MalformedBitPattern'
INVALID_NUMERIC_LITERAL = 'InvalidNumericLiteral'

MESSAGES = {
    MALFORMED_BIT_PATTERN: '64-bit binary string required.',
    INVALID_NUMERIC_LITERAL: 'Invalid number format',
}

class Ok:
    def __init__(self, value):
        self.value = value

    def __bool__(self):
        return True

    def __repr__(self):
        return 'Ok({0!r})'.format(self.value)

class Err:
    def __init__(self, kind, text=''):
        self.kind = kind
        self.text = text
        self.message = MESSAGES[kind]

    def __bool__(self):
        return False

    def __repr__(self):
        return 'Err({0}, {1!r})'.format(self.kind, self.text)

"""
Parses a 64 character string of 0s and 1s into its bit pattern.
Whitespace is ignored, so the spaced display form
    0 01111111111 0000000000000000000000000000000000000000000000000000
is accepted as well.
@param str text the input
@return Ok(int) or Err(MALFORMED_BIT_PATTERN)
"""
def parse_bits(text):
    s = ''.join(text.split())
    if len(s) != 64 or s.strip('01') != '':
        return Err(MALFORMED_BIT_PATTERN, text)
    return Ok(bitstring.BitArray(bin=s).uint)

"""
Parses a decimal literal with the host parser and returns the bit pattern
of the nearest binary64.
@param str text the input, e.g. "0.1", "-2.5e-3", "inf"
@return Ok(int) or Err(INVALID_NUMERIC_LITERAL)
"""
def parse_decimal(text):
    try:
        x = np.float64(text.strip())
    except (ValueError, TypeError):
        return Err(INVALID_NUMERIC_LITERAL, text)
    return Ok(double2bits(x))

def parse_operand(text, bits=False):
    if bits:
        return parse_bits(text)
    return parse_decimal(text)

def double2bits(x):
    return bitstring.BitArray(float=float(x), length=64).uint

def bits2double(bits):
    return bitstring.BitArray(uint=bits, length=64).float

def bits2str(bits):
    if bits < 0 or bits >> 64:
        raise ValueError('not a 64-bit pattern: {0}'.format(bits))
    return bitstring.BitArray(uint=bits, length=64).bin

# sign, exponent and fraction as three space separated groups (1, 11, 52)
def spaced64(bits):
    s = bits2str(bits)
    return s[0] + " " + s[1:12] + " " + s[12:]

def classify(bits):
    e = (bits >> FRAC_BITS) & EXP_MAX
    f = bits & ((1 << FRAC_BITS) - 1)
    if e == EXP_MAX:
        return 'NaN' if f else 'Inf'
    if e == 0:
        return 'Subnormal' if f else 'Zero'
    return 'Normal'

"""
Returns the highest finite number representable by the float type
@param int exp_bits number of exponent bits
@param int man_bits number of mantissa bits
@return float number
"""
def highest_number(exp_bits, man_bits):
    return (+1)*(2 - 2**(-man_bits))*2**(2**exp_bits -2**(exp_bits -1) -1)

"""
Returns the lowest (subnormal) number above zero representable by the float type.
@param int exp_bits number of exponent bits
@param int man_bits number of mantissa bits
@return float number
"""
def lowest_subnormal_number(exp_bits, man_bits):
    return (+1)*(0.0 + 2**(-man_bits))*2**(-exponent_bias(exp_bits) +1)

"""
Returns the lowest normal number above zero representable by the float type
@param int exp_bits number of exponent bits
@return float number
"""
def lowest_regular_number(exp_bits):
    return 2.0**(-exponent_bias(exp_bits) +1)

#!/usr/bin/env python3
#
# turns the step tags of an operation into a short explanation

import re
import arith
import codec
from float_utils import bits2double

TEXT = {
    codec.ALIGN: "The exponents are aligned so the numbers can be combined.",
    codec.ADD: "The mantissas are added together.",
    codec.SUB_A_GT_B: "The first number is larger, so we subtract the second from the first.",
    codec.SUB_B_GT_A: "The second number is larger, so we subtract the first from the second.",
    codec.ROUND_CARRY: "Rounding caused a carry, so the result was adjusted.",
    codec.ROUND_KEEP: "No rounding adjustment was needed.",
}

NORMALIZE = re.compile(r'^normalize:(left|right)\((\d+)\)$')

GENERIC = "- The numbers are aligned, operated on, normalized, and rounded."

def describe(tag):
    if tag in TEXT:
        return TEXT[tag]
    m = NORMALIZE.match(tag)
    if m is None:
        raise ValueError('unknown step tag {0!r}'.format(tag))
    return "The result is shifted {0} by {1} bit{2} to normalize it.".format(
        m.group(1), m.group(2), '' if m.group(2) == '1' else 's')

"""
Compresses the step sentences into at most max_lines lines of at most
width characters, every line starting with "- ".
"""
def concise_why(steps, width=72, max_lines=5):
    out = ["Steps:"]
    if not steps:
        out.append(GENERIC)
        return "\n".join(out) + "\n"
    line = "-"
    for tag in steps:
        human = describe(tag)
        if line != "-" and len(line) + len(human) + 1 > width:
            out.append(line)
            line = "-"
            if len(out) - 1 == max_lines:
                break
        line += " " + human
    else:
        out.append(line)
    return "\n".join(out) + "\n"

def near(x, target, tol):
    return abs(x - target) < tol

# notes for the classic examples of floating point error, operands within a
# small tolerance of 0.1, 0.2, 1 and 1e16 count as the example
def notes(op, a, b):
    op = arith.parse_op(op) if op not in arith.OPS else op
    x, y = bits2double(a), bits2double(b)
    n = []
    if op == arith.ADD_OP and near(x, 0.1, 1e-12) and near(y, 0.2, 1e-12):
        n.append("Note: 0.1 + 0.2 does not exactly equal 0.3 due to how decimals are represented in binary.")
        n.append("Binary floating-point cannot represent 0.1 or 0.2 exactly, so the sum is slightly off.")
    if op == arith.ADD_OP and near(x, 1e16, 1e-2) and near(y, 1.0, 1e-12):
        n.append("Note: Adding 1 to a large number like 1e16 may not change the result due to limited precision.")
        n.append("The value 1 is too small to affect 1e16 in binary64, so the sum is still 1e16.")
    if op == arith.SUB_OP and near(x, 1e16, 1e-2) and near(y, 1e16, 1e-2):
        n.append("Note: Subtracting two large, nearly equal numbers can lose precision.")
        n.append("The result may not be exactly zero if the previous addition lost the small increment.")
    return n

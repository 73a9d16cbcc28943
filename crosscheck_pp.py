#!/usr/bin/env python3
#
# pre processing script comparing the simulator against the host FPU (numpy)
# produces a json output file
# call by:
# ./crosscheck_pp.py -n 100000 -s 42 >crosscheck.json

import sys # sys.stdout, sys.stderr
import argparse
import json # json.dump(), json.load()
import random
import numpy as np # np.float64, np.errstate()
from collections import Counter # Counter().keys(), Counter().values()
import float_utils as fl
import arith

# exponent fields likely to hit edge cases
SPECIAL_EXPS = [
    0x000,  # subnormal / zero
    0x001,  # smallest normal
    0x002,
    0x3FE,  # 0.5 .. 1.0
    0x3FF,  # 1.0 .. 2.0
    0x400,
    0x433,  # 2^52, ulp = 1
    0x434,
    0x7FD,
    0x7FE,  # largest finite
    0x7FF,  # inf / NaN
]

# fraction fields likely to hit edge cases
SPECIAL_FRACS = [
    0x0000000000000,
    0x0000000000001,
    0x8000000000000,
    0xFFFFFFFFFFFFF,
    0x7FFFFFFFFFFFF,
    0x0000000000003,
    0xFFFFFFFFFFFFE,
]

# largest finite, smallest normal and smallest subnormal magnitudes
EDGE_VALUES = [
    fl.double2bits(fl.highest_number(fl.EXP_BITS, fl.FRAC_BITS)),
    fl.double2bits(fl.lowest_regular_number(fl.EXP_BITS)),
    fl.double2bits(fl.lowest_subnormal_number(fl.EXP_BITS, fl.FRAC_BITS)),
]

def random_bits(rnd):
    sign = rnd.getrandbits(1)
    if rnd.random() < 0.05:
        return (sign << 63) | rnd.choice(EDGE_VALUES)
    if rnd.random() < 0.3:
        e = rnd.choice(SPECIAL_EXPS)
    else:
        e = rnd.randrange(0, fl.EXP_MAX + 1)
    if rnd.random() < 0.3:
        f = rnd.choice(SPECIAL_FRACS)
    else:
        f = rnd.getrandbits(fl.FRAC_BITS)
    return (sign << 63) | (e << fl.FRAC_BITS) | f

def host(op, a, b):
    x, y = np.float64(fl.bits2double(a)), np.float64(fl.bits2double(b))
    with np.errstate(all='ignore'):
        if op == arith.ADD_OP:
            z = x + y
        elif op == arith.SUB_OP:
            z = x - y
        elif op == arith.MUL_OP:
            z = x * y
        else:
            z = x / y
    return fl.double2bits(z)

def mismatch_kind(got, want):
    if got == want:
        return None
    if fl.classify(got) == 'NaN' and fl.classify(want) == 'NaN':
        return None
    if fl.classify(got) == 'Zero' and fl.classify(want) == 'Zero':
        return 'zero_sign'
    return 'value'

def crosscheck(n, seed, verbose=False):
    rnd = random.Random(seed)
    stats = {}
    for op in arith.OPS:
        kinds, samples, exponents = Counter(), [], []
        for i in range(0, n):
            if verbose and i % 1000 == 0:
                print("{0} {1}%, {2}/{3}".format(op, int(round(i*100/n)), i, n), end="\r", file=sys.stderr)
            a, b = random_bits(rnd), random_bits(rnd)
            got, _ = arith.compute(op, a, b)
            want = host(op, a, b)
            exponents.append((got >> fl.FRAC_BITS) & fl.EXP_MAX)
            kind = mismatch_kind(got, want)
            if kind is None:
                continue
            kinds[kind] += 1
            if len(samples) < 20:
                samples.append({
                    'a': fl.spaced64(a),
                    'b': fl.spaced64(b),
                    'got': fl.spaced64(got),
                    'want': fl.spaced64(want),
                    'kind': kind,
                })
        exp = Counter(exponents)
        stats[op] = {
            'n': n,
            'mismatches': sum(kinds.values()),
            'kinds': dict(kinds),
            'samples': samples,
            'exp': list(exp.keys()),   # list of result exponent fields
            'num': list(exp.values()), # number of occurences of the exponent fields
        }
    if verbose:
        print("", file=sys.stderr)
    return stats

def main(argv=None):
    parser = argparse.ArgumentParser(description='Crosscheck the simulator against numpy float64.')
    parser.add_argument('-n', '--rounds', help='operand pairs per operation.', type=int, default=10000)
    parser.add_argument('-s', '--seed', help='random seed.', type=int, default=0xF64)
    parser.add_argument('-v', '--verbose', help='print progress to stderr.', default=False, action="store_true")
    args = parser.parse_args(argv)

    json_data = {
        'seed': args.seed,
        'ops': crosscheck(args.rounds, args.seed, args.verbose),
    }
    json.dump(json_data, sys.stdout)
    return 0

if __name__ == "__main__":
    sys.exit(main())

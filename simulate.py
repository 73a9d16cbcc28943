#!/usr/bin/env python3
#
# binary64 floating point simulator, command line front end
# call by:
# ./simulate.py 2.5 add 3.75
# ./simulate.py -b "0 01111111011 1001100110011001100110011001100110011001100110011010" + "0 01111111100 1001100110011001100110011001100110011001100110011010"
# ./simulate.py --example precision --json >out.json

import sys # sys.stdout, sys.stderr, sys.exit()
import argparse
import json # json.dump()
import arith
import float_utils as fl
import narrate

EXAMPLES = ('precision', 'significance')

def run(a_text, op, b_text, bits=False):
    """
    Parses both operands, runs the operation and collects everything the
    output shows. Returns Ok(dict) or the Err of the first bad operand.
    """
    a = fl.parse_operand(a_text, bits)
    if not a:
        return a
    b = fl.parse_operand(b_text, bits)
    if not b:
        return b
    op = arith.parse_op(op)
    res, steps = arith.compute(op, a.value, b.value)
    return fl.Ok({
        'a_dec': repr(fl.bits2double(a.value)),
        'a_bin': fl.spaced64(a.value),
        'b_dec': repr(fl.bits2double(b.value)),
        'b_bin': fl.spaced64(b.value),
        'op': op.upper(),
        'result_dec': repr(fl.bits2double(res)),
        'result_bin': fl.spaced64(res),
        'result_class': fl.classify(res),
        'steps': steps,
        'notes': narrate.notes(op, a.value, b.value),
    })

def render(r):
    text = (
        "A  (dec): " + r['a_dec'] + "\n" +
        "A  (bin): " + r['a_bin'] + "\n" +
        "B  (dec): " + r['b_dec'] + "\n" +
        "B  (bin): " + r['b_bin'] + "\n" +
        "Op: " + r['op'] + "\n" +
        "Result (dec): " + r['result_dec'] + "\n" +
        "Result (bin): " + r['result_bin'] + "\n\n" +
        narrate.concise_why(r['steps'])
    )
    if r['notes']:
        text += "\n" + "\n".join(r['notes']) + "\n"
    return text

def example(name):
    if name == 'precision':
        return [run("0.1", "add", "0.2")]
    # 1e16 + 1 loses the 1, so subtracting 1e16 again gives 0 instead of 1
    first = run("10000000000000000", "add", "1")
    second = run(first.value['result_dec'], "sub", "10000000000000000")
    return [first, second]

# argparse takes "-1e5" or "-inf" for an option, so every token that is not
# a known flag moves behind "--" in its original order
def operands_last(argv):
    flags, operands = [], []
    it = iter(argv)
    for tok in it:
        if tok == '--':
            operands.extend(it)
            break
        if tok.startswith('-') and tok != '-' and not fl.parse_decimal(tok):
            flags.append(tok)
            if tok in ('-e', '--example'):
                value = next(it, None)
                if value is not None:
                    flags.append(value)
        else:
            operands.append(tok)
    if operands:
        return flags + ['--'] + operands
    return flags

def main(argv=None):
    parser = argparse.ArgumentParser(description='Simulate binary64 arithmetic bit by bit.')
    parser.add_argument('a', nargs='?', help='first operand (decimal, or 64 binary digits with -b)')
    parser.add_argument('op', nargs='?', help='operator: add, sub, mul, div (or + - * /)')
    parser.add_argument('b', nargs='?', help='second operand')
    parser.add_argument('-b', '--bits', help='operands are 64-bit binary strings instead of decimals.', default=False, action="store_true")
    parser.add_argument('-e', '--example', help='run a classic example instead.', choices=EXAMPLES)
    parser.add_argument('-j', '--json', help='dump the results as json.', default=False, action="store_true")
    args = parser.parse_args(operands_last(sys.argv[1:] if argv is None else argv))

    if args.example:
        results = example(args.example)
    elif args.a is None or args.op is None or args.b is None:
        parser.error('the operands a, b and an operator are required (or use --example)')
    else:
        try:
            results = [run(args.a, args.op, args.b, args.bits)]
        except ValueError as e:
            parser.error(str(e))

    for r in results:
        if not r:
            print("Error: " + r.message, file=sys.stderr)
            return 2

    if args.json:
        json.dump([r.value for r in results], sys.stdout)
        print()
    else:
        print("\n".join(render(r.value) for r in results), end="")
    return 0

if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
#
# plot script for the output of crosscheck_pp.py
# call by:
# ./crosscheck_pp.py -n 100000 | ./crosscheck_plot.py crosscheck.pdf

import sys # sys.stdin
import json # json.dump(), json.load()
import argparse
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

config = {
    'add': {'label': 'add', 'color': 'tab:blue'},
    'sub': {'label': 'sub', 'color': 'tab:green'},
    'mul': {'label': 'mul', 'color': 'tab:purple'},
    'div': {'label': 'div', 'color': 'tab:red'},
}

def plot(j, outfile):
    ops = [op for op in config if op in j['ops']]
    fig, (ax1, ax2) = plt.subplots(1, 2)
    fig.set_figheight(3.2)
    fig.set_figwidth(9)

    # mismatches in % of all rounds, split by kind
    x = np.arange(len(ops))
    bottom = np.zeros(len(ops))
    for kind, hatch in (('value', ''), ('zero_sign', '//')):
        pct = np.array([100*j['ops'][op]['kinds'].get(kind, 0)/j['ops'][op]['n'] for op in ops])
        ax1.bar(x, pct, bottom=bottom, hatch=hatch, color=[config[op]['color'] for op in ops], alpha=0.7, label=kind)
        bottom += pct
    ax1.set_xticks(x)
    ax1.set_xticklabels([config[op]['label'] for op in ops])
    ax1.set_ylabel('mismatches in %')
    ax1.legend(loc='upper right', prop={'size': 6})

    # result exponent fields
    for op in ops:
        exp, num = j['ops'][op]['exp'], j['ops'][op]['num']
        order = np.argsort(exp)
        ax2.plot(np.array(exp)[order], np.array(num)[order], '+', c=config[op]['color'], label=config[op]['label'])
    ax2.set_yscale('log')
    ax2.set_xlabel('result exponent field')
    ax2.set_ylabel('# results')
    ax2.legend(loc='upper center', prop={'size': 6})

    fig.suptitle('seed {0}'.format(j['seed']), fontsize=8)
    fig.tight_layout()
    fig.savefig(outfile)

def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot crosscheck stats.')
    parser.add_argument('outfile', help='the output plot file name')
    args = parser.parse_args(argv)

    j = json.load(sys.stdin)
    for op in j['ops']:
        print(op, "mismatches:", j['ops'][op]['mismatches'], "/", j['ops'][op]['n'])
    plot(j, args.outfile)
    return 0

if __name__ == "__main__":
    sys.exit(main())

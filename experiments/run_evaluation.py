"""
Batch evaluation of random Hackenbush positions.

Reads config from experiments/config.yaml. Generates seeded random triangle
positions, evaluates each exactly, and saves results incrementally.

Usage:
    python experiments/run_evaluation.py                       # uses config.yaml
    python experiments/run_evaluation.py --config my.yaml      # custom config
    python experiments/run_evaluation.py --count 5 --sizes 4 5 # quick test
    python experiments/run_evaluation.py --workers 4           # threaded root
"""

import os
import sys
import json
import time
import argparse
import datetime
import numpy as np

# Ensure project root is on path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

import yaml
from tqdm import tqdm

from game_search.minimax import search_position
from hackenbush.generators import random_triangles
from hackenbush.position import Color
from surreals.arena import Arena


# ---------------------------------------------------------------------------
# Defaults (used if config.yaml missing or incomplete)
# ---------------------------------------------------------------------------
DEFAULTS = {
    'output_dir': 'experiments/results',
    'seed': 0,
    'positions': {
        'count': 20,
        'sizes': [3, 4, 5, 6],
    },
    'search': {
        'perspective': 'blue',
        'workers': 1,
        'use_cache': True,
        'verbose': False,
    },
}


def load_config(config_path):
    """Load YAML config, falling back to defaults for missing keys."""
    if config_path and os.path.exists(config_path):
        with open(config_path, 'r') as f:
            cfg = yaml.safe_load(f) or {}
    else:
        print(f"[WARN] Config not found at {config_path}, using defaults.")
        cfg = {}

    # Merge with defaults
    for key, default_val in DEFAULTS.items():
        if key not in cfg:
            cfg[key] = dict(default_val) if isinstance(default_val, dict) else default_val
        elif isinstance(default_val, dict):
            for sub_key, sub_val in default_val.items():
                if sub_key not in cfg[key]:
                    cfg[key][sub_key] = sub_val

    return cfg


def fmt_time(seconds):
    """Format seconds as human-readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds/60:.1f}m"
    else:
        return f"{seconds/3600:.1f}h"


def write_jsonl_line(fh, record):
    """Write a single JSON record to a .jsonl file handle and flush."""
    fh.write(json.dumps(record) + '\n')
    fh.flush()


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

def generate_positions(count, sizes, seed):
    """Yield (idx, size, position) for `count` positions per size."""
    rng = np.random.default_rng(seed)
    idx = 0
    for size in sizes:
        for _ in range(count):
            yield idx, size, random_triangles(size, rng)
            idx += 1


def run_evaluations(cfg, arena, progress_fh=None):
    """Evaluate every generated position; returns a list of result dicts."""
    pos_cfg = cfg['positions']
    search_cfg = cfg['search']
    perspective = Color(search_cfg['perspective'])

    total = pos_cfg['count'] * len(pos_cfg['sizes'])
    results = []
    for idx, size, position in tqdm(
        generate_positions(pos_cfg['count'], pos_cfg['sizes'], cfg['seed']),
        total=total, desc="Evaluating",
    ):
        evaluated, stats = search_position(
            position, perspective, arena,
            workers=search_cfg['workers'],
            use_cache=search_cfg['use_cache'],
            verbose=search_cfg['verbose'],
        )
        result = {
            'idx': idx,
            'size': size,
            'edges': len(position),
            'value_id': evaluated.value.index,
            'value_approx': evaluated.value.approximate_real(),
            'birthday': evaluated.value.birthday(),
            'best_move': evaluated.best_move,
            'nodes_evaluated': stats['nodes_evaluated'],
            'cache_hits': stats['cache_hits'],
            'time': stats['time'],
        }
        results.append(result)
        if progress_fh:
            write_jsonl_line(progress_fh, result)
    return results


def summarize(results, arena):
    """Per-size timing and value statistics."""
    summary = {'arena_day': arena.day, 'arena_size': len(arena), 'by_size': {}}
    sizes = sorted({r['size'] for r in results})
    for size in sizes:
        rows = [r for r in results if r['size'] == size]
        times = np.array([r['time'] for r in rows], dtype=np.float64)
        values = np.array([r['value_approx'] for r in rows], dtype=np.float64)
        summary['by_size'][str(size)] = {
            'count': len(rows),
            'mean_time': float(times.mean()),
            'max_time': float(times.max()),
            'mean_nodes': float(np.mean([r['nodes_evaluated'] for r in rows])),
            'blue_wins': int(np.sum(values > 0)),
            'red_wins': int(np.sum(values < 0)),
            'zero': int(np.sum(values == 0)),
        }
    return summary


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main():
    parser = argparse.ArgumentParser(
        description='Hackenbush evaluation runner: exact surreal values of random positions'
    )
    parser.add_argument('--config', type=str,
                        default=os.path.join(PROJECT_ROOT, 'experiments', 'config.yaml'),
                        help='Path to config YAML')
    parser.add_argument('--count', type=int, default=None,
                        help='Override positions per size')
    parser.add_argument('--sizes', type=int, nargs='+', default=None,
                        help='Override node counts of generated positions')
    parser.add_argument('--workers', type=int, default=None,
                        help='Threads for root subtrees (1 = serial)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Override RNG seed')
    args = parser.parse_args()

    cfg = load_config(args.config)

    # Apply CLI overrides
    if args.count is not None:
        print(f"[CLI override] count = {args.count}")
        cfg['positions']['count'] = args.count
    if args.sizes is not None:
        print(f"[CLI override] sizes = {args.sizes}")
        cfg['positions']['sizes'] = args.sizes
    if args.workers is not None:
        print(f"[CLI override] workers = {args.workers}")
        cfg['search']['workers'] = args.workers
    if args.seed is not None:
        print(f"[CLI override] seed = {args.seed}")
        cfg['seed'] = args.seed

    timestamp = datetime.datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
    output_dir = os.path.join(PROJECT_ROOT, cfg['output_dir'], timestamp)
    os.makedirs(output_dir, exist_ok=True)

    config_copy_path = os.path.join(output_dir, 'config_used.yaml')
    with open(config_copy_path, 'w') as f:
        yaml.dump(cfg, f, default_flow_style=False)

    print()
    print("=" * 60)
    print("  Hackenbush Evaluation Runner")
    print("=" * 60)
    print(f"  Config:     {args.config}")
    print(f"  Output:     {output_dir}")
    print(f"  Sizes:      {cfg['positions']['sizes']} x {cfg['positions']['count']}")
    print(f"  Workers:    {cfg['search']['workers']}")
    print(f"  Started:    {timestamp}")
    print("=" * 60)
    print()

    arena = Arena()
    t_start = time.time()
    progress_path = os.path.join(output_dir, 'evaluation_progress.jsonl')
    with open(progress_path, 'w') as progress_fh:
        results = run_evaluations(cfg, arena, progress_fh)

    summary = summarize(results, arena)
    summary['total_time'] = time.time() - t_start
    summary_path = os.path.join(output_dir, 'results.json')
    with open(summary_path, 'w') as f:
        json.dump(summary, f, indent=2)

    print()
    print(f"  Evaluated {len(results)} positions in {fmt_time(summary['total_time'])}")
    print(f"  Arena: day {arena.day}, {len(arena)} values")
    for size, row in summary['by_size'].items():
        print(f"    size={size}: mean {row['mean_time']:.3f}s, "
              f"blue={row['blue_wins']} red={row['red_wins']} zero={row['zero']}")
    print(f"  Summary saved to {summary_path}")


if __name__ == "__main__":
    main()

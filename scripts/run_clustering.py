#!/usr/bin/env python3
"""
Main entry point for multi-view clustering.

This script clusters the items described by two view files and writes one
final consensus label per line.

Usage:
    python run_clustering.py --view1 v1.csv --view2 v2.csv --k 3 --seed 0
"""

from __future__ import annotations

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from mvsc.configs.base_config import Config
from mvsc.clustering.mv_clustering import MultiViewClustering
from mvsc.data.view_loader import load_views
from mvsc.exceptions import DegenerateInputError, NoSharedLabelsError
from mvsc.utils.visualization import plot_hierarchical_clustering


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Multi-view clustering with spherical k-means co-training'
    )
    parser.add_argument(
        '--view1', type=str, required=True,
        help='First view (.npy, .csv, .tsv or .txt)'
    )
    parser.add_argument(
        '--view2', type=str, required=True,
        help='Second view, same row order as the first'
    )
    parser.add_argument(
        '--k', type=int, default=2,
        help='Maximum number of clusters'
    )
    parser.add_argument(
        '--start-view', type=str, default='view1',
        choices=['view1', 'view2'],
        help='View that receives the initial partition'
    )
    parser.add_argument(
        '--nthresh', type=int, default=20,
        help='Rounds without objective improvement before a view stalls'
    )
    parser.add_argument(
        '--n-init', type=int, default=10,
        help='Restarts of the initial partitioner'
    )
    parser.add_argument(
        '--init-method', type=str, default='spherical',
        choices=['spherical', 'kmeans', 'hierarchical'],
        help='Initial partitioner'
    )
    parser.add_argument(
        '--max-iter', type=int, default=10000,
        help='Iteration cap for co-training'
    )
    parser.add_argument(
        '--seed', type=int, default=0,
        help='Random seed'
    )
    parser.add_argument(
        '--skip-header', type=int, default=0,
        help='Header lines to skip in text view files'
    )
    parser.add_argument(
        '--index-col', action='store_true',
        help='Text view files start with a row-name column'
    )
    parser.add_argument(
        '--output', type=str, default=None,
        help='File for the final labels (default: outputs/seed_<seed>/final_labels.txt)'
    )
    parser.add_argument(
        '--plot-file', type=str, default=None,
        help='Save a hierarchical clustering plot here'
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Print progress'
    )
    parser.add_argument(
        '--debug', action='store_true',
        help='Print per-round objectives (implies --verbose)'
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    config = Config(base_seed=args.seed)
    config.n_clusters = args.k
    config.nthresh = args.nthresh
    config.n_init = args.n_init
    config.max_iter = args.max_iter
    config.verbose = args.verbose
    config.debug = args.debug
    config.update_for_start_view(args.start_view)
    config.update_for_init(args.init_method)
    config.plot_file = args.plot_file
    if args.output:
        config.labels_file = args.output

    if config.verbose or config.debug:
        print("=" * 60)
        print("Multi-View Spherical Clustering")
        print("=" * 60)
        print(f"View 1: {args.view1}")
        print(f"View 2: {args.view2}")
        print(f"K: {config.n_clusters}")
        print(f"Start view: {config.start_view}")
        print(f"nthresh: {config.nthresh}")
        print(f"Seed: {config.current_seed}")
        print("=" * 60)

    try:
        view1, view2 = load_views(args.view1, args.view2, skip_header=args.skip_header, index_col=args.index_col)
    except (FileNotFoundError, ValueError, DegenerateInputError) as e:
        print(f"Error: {e}")
        return 1

    model = MultiViewClustering.from_config(config)
    try:
        result = model.fit(view1, view2)
    except NoSharedLabelsError as e:
        print(f"Error: {e}")
        return 2

    out_dir = os.path.dirname(config.labels_file)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.savetxt(config.labels_file, result.final_labels, fmt='%d')

    if config.plot_file:
        plot_hierarchical_clustering(view1, view2, result.final_labels, config.plot_file)

    print(f"Clusters: {result.n_clusters}")
    print(f"Agreement rate: {result.agreement_rate:.4f}")
    print(f"Labels written to: {config.labels_file}")
    return 0


if __name__ == '__main__':
    sys.exit(main())

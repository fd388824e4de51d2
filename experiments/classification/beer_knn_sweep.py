import sys
sys.path.append('.')

import argparse
from pathlib import Path

import pandas as pd

from config.settings import DATA_PATHS, MAX_K, RANDOM_SEED, RESULTS_PATHS, TRAIN_FRACTION
from src.pipeline.beer_classification import run_full_analysis


def save_results(results, output_dir):
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    results['cleaned'].to_csv(output_dir / 'beers_imputed.csv', index=False)

    saved = []
    for key in ['beer_type', 'style']:
        run = results[key]
        summary_file = output_dir / f'{key}_summary.csv'
        accuracy_file = output_dir / f'{key}_accuracy_by_k.csv'
        matrix_file = output_dir / f'{key}_confusion_matrix.csv'

        run.summary().to_csv(summary_file, index=False)
        run.accuracy_frame().to_csv(accuracy_file, index=False)
        run.report.to_frame().to_csv(matrix_file)
        saved.extend([summary_file, accuracy_file, matrix_file])

    return saved


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Impute, split and sweep K for the beer-type and beer-style KNN models.")
    parser.add_argument("--beers", type=str, default=DATA_PATHS['beers'],
                        help="Path to the beers CSV file.")
    parser.add_argument("--breweries", type=str, default=DATA_PATHS['breweries'],
                        help="Path to the breweries CSV file.")
    parser.add_argument("--max-k", type=int, default=MAX_K,
                        help=f"Largest K to evaluate (default: {MAX_K}).")
    parser.add_argument("--train-fraction", type=float, default=TRAIN_FRACTION,
                        help=f"Share of rows used for training (default: {TRAIN_FRACTION}).")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED,
                        help=f"Seed for the train/test split (default: {RANDOM_SEED}).")
    parser.add_argument("--cv-folds", type=int, default=None,
                        help="Also run a k-fold cross-validated sweep with this many folds.")
    parser.add_argument("--n-jobs", type=int, default=1,
                        help="Parallel workers for the K sweep (default: 1).")
    parser.add_argument("--output-dir", type=str, default=RESULTS_PATHS['data'],
                        help="Directory for result CSV files.")
    parser.add_argument("--plots", action="store_true",
                        help="Save accuracy-by-K and confusion matrix plots.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    results = run_full_analysis(
        args.beers, args.breweries,
        max_k=args.max_k,
        train_fraction=args.train_fraction,
        seed=args.seed,
        cv_folds=args.cv_folds,
        n_jobs=args.n_jobs
    )

    print(f"\n{'=' * 60}")
    print("SUMMARY")
    print(f"{'=' * 60}")
    with pd.option_context('display.width', 120):
        print(results['beer_type'].summary().to_string(index=False))
        print()
        print(results['style'].summary().to_string(index=False))

    for key in ['beer_type', 'style']:
        cv_sweep = results[key].cv_sweep
        if cv_sweep is not None:
            print(f"{key}: cross-validated best K={cv_sweep.best_k} ({cv_sweep.best_accuracy:.4f})")

    saved = save_results(results, args.output_dir)
    print(f"\nResults saved to: {args.output_dir}")
    for path in saved:
        print(f"  - {path}")

    if args.plots:
        from analysis.knn_visualizations import plot_run
        for key in ['beer_type', 'style']:
            for path in plot_run(results[key]):
                print(f"  - {path}")

    return results


if __name__ == "__main__":
    main()

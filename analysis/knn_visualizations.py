import sys
sys.path.append('.')

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from pathlib import Path

from config.settings import RESULTS_PATHS

plt.style.use('default')
sns.set_palette("husl")


def plot_accuracy_by_k(sweep, title, output_path):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    k_values = np.arange(1, len(sweep.accuracies) + 1)

    plt.figure(figsize=(10, 6))
    plt.plot(k_values, sweep.accuracies, marker='o', markersize=3)
    plt.axvline(sweep.best_k, color='red', linestyle='--',
                label=f'Best K={sweep.best_k} ({sweep.best_accuracy:.3f})')
    plt.xlabel('K (number of neighbours)')
    plt.ylabel('Accuracy')
    plt.title(title)
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_path, dpi=300, bbox_inches='tight')
    plt.close()

    return Path(output_path)


def plot_confusion_matrix(report, title, output_path):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    plt.figure(figsize=(8, 6))
    sns.heatmap(report.to_frame(), annot=True, fmt='d', cmap='Blues', cbar_kws={'shrink': .8})
    plt.title(f'{title}\nAccuracy: {report.accuracy:.3f}')
    plt.tight_layout()
    plt.savefig(output_path, dpi=300, bbox_inches='tight')
    plt.close()

    return Path(output_path)


def plot_run(run, output_dir=RESULTS_PATHS['plots']):
    slug = run.model_name.lower().replace(' ', '_')
    return [
        plot_accuracy_by_k(run.sweep, f'{run.model_name}: accuracy by K',
                           Path(output_dir) / f'{slug}_accuracy_by_k.png'),
        plot_confusion_matrix(run.report, run.model_name,
                              Path(output_dir) / f'{slug}_confusion_matrix.png')
    ]

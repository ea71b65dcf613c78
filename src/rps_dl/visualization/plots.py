"""
Evaluation plots

Per-class accuracy bars, confusion matrix heatmaps and example grids,
all written to PNG files.
"""
import logging
from pathlib import Path
from typing import List

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import torch
from torchvision.utils import make_grid

from ..classes import CLASS_NAMES, IMAGE_HEIGHT, IMAGE_WIDTH

logger = logging.getLogger(__name__)


def _save(fig, output_path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info(f"💾 Plot saved to: {output_path}")
    return output_path


def plot_per_class_accuracy(class_accuracy, output_path, title: str = "Accuracy") -> Path:
    names = [entry.class_name for entry in class_accuracy]
    values = [entry.accuracy for entry in class_accuracy]

    fig, ax = plt.subplots(figsize=(6, 4))
    bars = ax.bar(names, values, color=['slategray', 'skyblue', 'salmon'], alpha=0.85)
    for bar, entry in zip(bars, class_accuracy):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height() + 0.02,
                f'{entry.accuracy:.3f}\n(n={entry.count})', ha='center', va='bottom', fontsize=9)

    ax.set_ylim(0, 1.2)
    ax.set_ylabel('Accuracy')
    ax.set_title(title)
    ax.grid(True, axis='y', alpha=0.3)
    return _save(fig, output_path)


def plot_confusion_matrix(matrix: np.ndarray, output_path, title: str = "Confusion Matrix") -> Path:
    fig, ax = plt.subplots(figsize=(5, 5))
    ax.imshow(matrix, cmap='Blues')

    ticks = np.arange(len(CLASS_NAMES))
    ax.set_xticks(ticks)
    ax.set_yticks(ticks)
    ax.set_xticklabels(CLASS_NAMES)
    ax.set_yticklabels(CLASS_NAMES)
    ax.set_xlabel('Predicted Label')
    ax.set_ylabel('True Label')
    ax.set_title(title)

    threshold = matrix.max() / 2 if matrix.size and matrix.max() > 0 else 0
    for i in range(matrix.shape[0]):
        for j in range(matrix.shape[1]):
            color = 'white' if matrix[i, j] > threshold else 'black'
            ax.text(j, i, str(matrix[i, j]), ha='center', va='center', color=color)

    return _save(fig, output_path)


def plot_examples(images: torch.Tensor, output_path, labels: torch.Tensor = None,
                  title: str = "RPS Data Examples") -> Path:
    """Grid of flattened [N, 64*64] examples, 0..255 intensities."""
    tiles = images.reshape(-1, 1, IMAGE_HEIGHT, IMAGE_WIDTH).float() / 255.0
    nrow = int(np.ceil(np.sqrt(tiles.shape[0])))
    grid = make_grid(tiles, nrow=nrow, padding=4, pad_value=1.0)

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(grid[0].numpy(), cmap='gray', vmin=0.0, vmax=1.0)
    ax.axis('off')
    if labels is not None:
        counts = labels.argmax(dim=1).bincount(minlength=len(CLASS_NAMES)).tolist()
        title += " (" + ", ".join(f"{n}: {c}" for n, c in zip(CLASS_NAMES, counts)) + ")"
    ax.set_title(title)
    return _save(fig, output_path)

"""
Unit tests for evaluation plots.
"""
import matplotlib.pyplot as plt
import numpy as np
import torch

from rps_dl.evaluation import ClassAccuracy
from rps_dl.visualization.plots import (
    plot_confusion_matrix, plot_examples, plot_per_class_accuracy
)
from tests.fakes import one_hot_rows


class TestPlots:

    def test_per_class_accuracy_plot(self, tmp_path):
        class_accuracy = [
            ClassAccuracy('Rock', 0.5, 2),
            ClassAccuracy('Paper', 1.0, 2),
            ClassAccuracy('Scissors', 0.0, 0),
        ]

        path = plot_per_class_accuracy(class_accuracy, tmp_path / "accuracy.png")

        assert path.exists()
        assert plt.get_fignums() == []

    def test_confusion_matrix_plot(self, tmp_path):
        matrix = np.array([[1, 1, 0], [0, 2, 0], [1, 0, 1]])

        path = plot_confusion_matrix(matrix, tmp_path / "plots" / "confusion.png")

        assert path.exists()

    def test_confusion_matrix_plot_all_zero(self, tmp_path):
        path = plot_confusion_matrix(np.zeros((3, 3), dtype=np.int64), tmp_path / "zero.png")

        assert path.exists()

    def test_examples_grid(self, tmp_path):
        images = torch.rand(42, 4096) * 255
        labels = one_hot_rows([i % 3 for i in range(42)])

        path = plot_examples(images, tmp_path / "examples.png", labels)

        assert path.exists()

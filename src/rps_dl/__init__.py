"""
RPS Deep Learning Module

Classifier, dataset, evaluation and training components for the
Rock/Paper/Scissors camera demo.

Author: RPS-Cam Team
"""

__version__ = "1.0.0"

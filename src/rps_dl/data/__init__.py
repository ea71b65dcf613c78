"""
Data module for Rock/Paper/Scissors dataset handling
"""

from .dataset import Batch, RPSDataset

__all__ = ['Batch', 'RPSDataset']

"""
Scoped tensor lifetimes.

Multi-step tensor computations run inside a ``TensorScope``: every intermediate
is registered with ``track`` and dropped when the scope exits, so only the
values explicitly handed back to the caller outlive the computation.
"""
from typing import List

import torch


class TensorScope:
    """Context manager collecting intermediate tensors and releasing them on exit.

    Autograd is disabled for the lifetime of the scope.
    """

    def __init__(self):
        self._tensors: List[torch.Tensor] = []
        self._no_grad = torch.no_grad()

    def track(self, tensor: torch.Tensor) -> torch.Tensor:
        self._tensors.append(tensor)
        return tensor

    def keep(self, tensor: torch.Tensor) -> torch.Tensor:
        """Hand a tracked tensor out of the scope; the caller now owns it."""
        self._tensors = [t for t in self._tensors if t is not tensor]
        return tensor

    def release(self) -> None:
        self._tensors.clear()

    def __len__(self) -> int:
        return len(self._tensors)

    def __enter__(self) -> "TensorScope":
        self._no_grad.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        self._no_grad.__exit__(exc_type, exc, tb)
        return False

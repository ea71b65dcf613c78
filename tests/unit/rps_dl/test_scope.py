"""
Unit tests for scoped tensor lifetimes.
"""
import pytest
import torch

from rps_dl.scope import TensorScope


class TestTensorScope:

    def test_tracked_tensors_released_on_exit(self):
        with TensorScope() as scope:
            scope.track(torch.zeros(3))
            scope.track(torch.ones(3))
            assert len(scope) == 2

        assert len(scope) == 0

    def test_keep_hands_tensor_to_caller(self):
        with TensorScope() as scope:
            intermediate = scope.track(torch.arange(4.0))
            result = scope.keep(scope.track(intermediate * 2))
            assert len(scope) == 1

        assert len(scope) == 0
        assert result.tolist() == [0.0, 2.0, 4.0, 6.0]

    def test_autograd_disabled_inside_scope(self):
        assert torch.is_grad_enabled()
        with TensorScope():
            assert not torch.is_grad_enabled()
        assert torch.is_grad_enabled()

    def test_release_happens_on_error(self):
        scope = TensorScope()
        with pytest.raises(RuntimeError):
            with scope:
                scope.track(torch.zeros(2))
                raise RuntimeError("boom")

        assert len(scope) == 0
        assert torch.is_grad_enabled()

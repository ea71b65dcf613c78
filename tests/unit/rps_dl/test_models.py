"""
Unit tests for model architectures and the classifier adapter.
"""
import pytest
import torch

from rps_dl.models import (
    AdvancedCNN, SimpleCNN, TorchClassifier, create_model, load_classifier
)
from tests.fakes import one_hot_rows

CPU = torch.device('cpu')


class TestArchitectures:

    @pytest.mark.parametrize("model_cls", [SimpleCNN, AdvancedCNN])
    def test_forward_shape(self, model_cls):
        model = model_cls().eval()

        with torch.no_grad():
            output = model(torch.zeros(2, 1, 64, 64))

        assert tuple(output.shape) == (2, 3)

    def test_create_model_by_name(self):
        assert isinstance(create_model('simple'), SimpleCNN)
        assert isinstance(create_model('advanced'), AdvancedCNN)

    def test_unknown_model_type(self):
        with pytest.raises(ValueError):
            create_model('gigantic')


class TestTorchClassifier:

    @pytest.fixture
    def classifier(self):
        torch.manual_seed(0)
        return TorchClassifier(SimpleCNN(), 'simple', learning_rate=0.01, device=CPU)

    def test_predict_returns_probabilities(self, classifier):
        batch = torch.rand(4, 64, 64, 1) * 255

        probabilities = classifier.predict(batch)

        assert tuple(probabilities.shape) == (4, 3)
        assert ((probabilities >= 0) & (probabilities <= 1)).all()
        assert torch.allclose(probabilities.sum(dim=1), torch.ones(4), atol=1e-5)
        assert not probabilities.requires_grad

    def test_fit_returns_loss_per_epoch(self, classifier):
        images = torch.rand(6, 4096) * 255
        labels = one_hot_rows([0, 1, 2, 0, 1, 2])

        history = classifier.fit(images, labels, epochs=3, batch_size=4)

        assert len(history) == 3
        assert all(loss >= 0 for loss in history)

    def test_fit_moves_predictions_towards_labels(self, classifier):
        images = torch.rand(8, 4096) * 255
        labels = one_hot_rows([1] * 8)

        classifier.fit(images, labels, epochs=30, batch_size=8)
        probabilities = classifier.predict(images.reshape(-1, 64, 64, 1))

        assert probabilities[:, 1].mean().item() > 0.5

    def test_save_and_load(self, classifier, tmp_path):
        batch = torch.rand(2, 64, 64, 1) * 255
        expected = classifier.predict(batch)

        path = classifier.save(tmp_path / "models" / "rps_model.pth")
        restored = load_classifier(path)

        assert path.exists()
        assert restored.model_type == 'simple'
        assert torch.allclose(restored.predict(batch), expected, atol=1e-6)

    def test_load_missing_checkpoint(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_classifier(tmp_path / "missing.pth")

    def test_create_uses_model_type(self):
        classifier = TorchClassifier.create('advanced')

        assert classifier.model_type == 'advanced'
        assert isinstance(classifier.model, AdvancedCNN)

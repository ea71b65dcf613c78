"""
Rock/Paper/Scissors model architectures and the classifier adapter.

``SimpleCNN`` trains fast and is the right choice for the small, clean
training set; ``AdvancedCNN`` is deeper and tends to overfit it.
``TorchClassifier`` wraps either one behind the Classifier protocol.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional

import torch
import torch.nn as nn
import torch.nn.functional as F

from .classes import CLASS_NAMES, IMAGE_HEIGHT, IMAGE_WIDTH, NUM_CLASSES
from .scope import TensorScope

logger = logging.getLogger(__name__)


class SimpleCNN(nn.Module):
    """Two small conv blocks and a linear head (~50 KB of weights)."""

    def __init__(self, num_classes: int = NUM_CLASSES):
        super(SimpleCNN, self).__init__()
        self.features = nn.Sequential(
            nn.Conv2d(1, 8, kernel_size=5),
            nn.ReLU(inplace=True),
            nn.MaxPool2d(2, 2),
            nn.Conv2d(8, 16, kernel_size=5),
            nn.ReLU(inplace=True),
            nn.MaxPool2d(2, 2),
        )
        # 64 -> 60 -> 30 -> 26 -> 13
        self.classifier = nn.Linear(16 * 13 * 13, num_classes)

    def forward(self, x):
        x = self.features(x)
        return self.classifier(torch.flatten(x, 1))


class AdvancedCNN(nn.Module):
    """Three conv blocks with batch norm and a dropout-regularized head."""

    def __init__(self, num_classes: int = NUM_CLASSES):
        super(AdvancedCNN, self).__init__()
        self.features = nn.Sequential(
            nn.Conv2d(1, 16, kernel_size=3, padding=1),
            nn.BatchNorm2d(16),
            nn.ReLU(inplace=True),
            nn.MaxPool2d(2, 2),
            nn.Conv2d(16, 32, kernel_size=3, padding=1),
            nn.BatchNorm2d(32),
            nn.ReLU(inplace=True),
            nn.MaxPool2d(2, 2),
            nn.Conv2d(32, 64, kernel_size=3, padding=1),
            nn.BatchNorm2d(64),
            nn.ReLU(inplace=True),
            nn.MaxPool2d(2, 2),
        )
        self.classifier = nn.Sequential(
            nn.Dropout(0.2),
            nn.Linear(64 * 8 * 8, 128),
            nn.ReLU(inplace=True),
            nn.Dropout(0.2),
            nn.Linear(128, num_classes),
        )

    def forward(self, x):
        x = self.features(x)
        return self.classifier(torch.flatten(x, 1))


MODEL_TYPES = {
    'simple': SimpleCNN,
    'advanced': AdvancedCNN,
}


def create_model(model_type: str) -> nn.Module:
    """Create model based on specified type"""
    if model_type not in MODEL_TYPES:
        raise ValueError(f"Unknown model type: {model_type}")
    return MODEL_TYPES[model_type]()


class TorchClassifier:
    """
    Classifier protocol implementation backed by a PyTorch module.

    Inputs arrive as [N, 64, 64, 1] pixel intensities (0..255); the adapter
    moves channels first and scales to 0..1 before the forward pass.
    """

    def __init__(self, model: nn.Module, model_type: str = "simple",
                 learning_rate: float = 0.001, device: Optional[torch.device] = None):
        self.device = device or torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        self.model = model.to(self.device)
        self.model_type = model_type
        self.learning_rate = learning_rate
        self.optimizer = torch.optim.Adam(self.model.parameters(), lr=learning_rate)

    @classmethod
    def create(cls, model_type: str = "simple", learning_rate: float = 0.001) -> "TorchClassifier":
        classifier = cls(create_model(model_type), model_type, learning_rate)
        total_params = sum(p.numel() for p in classifier.model.parameters())
        logger.info(f"🧠 Created {model_type} model ({total_params:,} parameters)")
        return classifier

    def _to_input(self, images: torch.Tensor) -> torch.Tensor:
        batch = images.reshape(-1, IMAGE_HEIGHT, IMAGE_WIDTH, 1).to(self.device)
        return batch.permute(0, 3, 1, 2).float() / 255.0

    def predict(self, batch: torch.Tensor) -> torch.Tensor:
        """Class probabilities [N, 3] for a batch [N, 64, 64, 1]."""
        self.model.eval()
        with TensorScope() as scope:
            inputs = scope.track(self._to_input(batch))
            logits = scope.track(self.model(inputs))
            return F.softmax(logits, dim=1).cpu()

    def fit(self, images: torch.Tensor, labels: torch.Tensor,
            epochs: int = 1, batch_size: int = 512) -> List[float]:
        """
        Train on flattened images [N, 64*64] with one-hot labels [N, 3].

        Returns:
            Average loss for each epoch
        """
        inputs = self._to_input(images)
        targets = labels.to(self.device).argmax(dim=1)
        num_samples = inputs.shape[0]

        history = []
        for _ in range(epochs):
            self.model.train()
            permutation = torch.randperm(num_samples, device=self.device)
            total_loss = 0.0
            for start in range(0, num_samples, batch_size):
                idx = permutation[start:start + batch_size]
                self.optimizer.zero_grad()
                loss = F.cross_entropy(self.model(inputs[idx]), targets[idx])
                loss.backward()
                self.optimizer.step()
                total_loss += loss.item() * len(idx)
            history.append(total_loss / num_samples)

        return history

    def save(self, path) -> Path:
        """Save weights and metadata to a checkpoint file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        torch.save({
            'model_state_dict': self.model.state_dict(),
            'model_type': self.model_type,
            'classes': CLASS_NAMES,
            'learning_rate': self.learning_rate,
        }, path)
        logger.info(f"💾 Model saved to: {path}")
        return path


def load_classifier(path) -> TorchClassifier:
    """Load a classifier from a checkpoint written by ``TorchClassifier.save``."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Model not found: {path}")

    checkpoint: Dict = torch.load(path, map_location='cpu')
    classes = checkpoint.get('classes', CLASS_NAMES)
    if list(classes) != CLASS_NAMES:
        raise ValueError(f"Checkpoint classes {classes} do not match {CLASS_NAMES}")

    model_type = checkpoint.get('model_type', 'simple')
    model = create_model(model_type)
    model.load_state_dict(checkpoint['model_state_dict'])
    classifier = TorchClassifier(model, model_type, checkpoint.get('learning_rate', 0.001))
    logger.info(f"✅ Loaded {model_type} model from {path}")
    return classifier

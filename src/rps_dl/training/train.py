"""
Rock/Paper/Scissors Training Module

Walks through the whole demo from the command line: load the dataset, look at
some examples, create a model, check the untrained model, train it, check it
again and save the weights.

Author: RPS-Cam Team
"""

import logging
import os
import time
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from ..classes import CLASS_NAMES
from ..data.dataset import RPSDataset
from ..evaluation import (
    TEST_DATA_SIZE, evaluate, per_class_accuracy, report_accuracy, report_confusion
)
from ..models import TorchClassifier

logger = logging.getLogger(__name__)

TRAIN_DATA_SIZE = 2100
EPOCHS_BY_MODEL = {'simple': 12, 'advanced': 20}

DEFAULT_CONFIG = {
    'batch_size': 512,
    'learning_rate': 0.001,
    'num_epochs': 12,
    'train_size': TRAIN_DATA_SIZE,
    'test_size': TEST_DATA_SIZE,
}


class RPSTrainer:
    """Runs epochs of ``fit`` on the training split and tracks validation accuracy."""

    def __init__(self, config: Dict):
        self.config = {**DEFAULT_CONFIG, **config}

    def train(self, classifier: TorchClassifier, dataset: RPSDataset) -> Dict:
        num_epochs = self.config['num_epochs']
        train_size = min(self.config['train_size'], dataset.num_train)
        test_size = min(self.config['test_size'], dataset.num_test)

        logger.info(f"🚀 Training {classifier.model_type} model for {num_epochs} epochs "
                    f"({train_size} train / {test_size} validation samples)")

        train_data = dataset.next_train_batch(train_size)
        history: Dict[str, List[float]] = {'loss': [], 'val_accuracy': []}
        start_time = time.time()

        pbar = tqdm(range(num_epochs), desc="Training")
        for epoch in pbar:
            losses = classifier.fit(train_data.images, train_data.labels,
                                    epochs=1, batch_size=self.config['batch_size'])
            val_accuracy = self.validate(classifier, dataset, test_size)

            history['loss'].append(losses[-1])
            history['val_accuracy'].append(val_accuracy)
            pbar.set_postfix({
                'Loss': f'{losses[-1]:.4f}',
                'Val': f'{val_accuracy:.2%}'
            })

        training_time = time.time() - start_time
        if history['val_accuracy']:
            logger.info(f"✅ Training finished in {training_time:.1f}s, "
                        f"final validation accuracy {history['val_accuracy'][-1]:.2%}")

        return {
            'history': history,
            'training_time': training_time,
            'model_type': classifier.model_type,
            'classes': CLASS_NAMES,
        }

    @staticmethod
    def validate(classifier: TorchClassifier, dataset: RPSDataset, test_size: int) -> float:
        preds, labels = evaluate(classifier, dataset, test_size)
        return float((preds == labels).float().mean().item())



def main():
    """Command line walkthrough: data, model, untrained check, training, trained check."""
    import argparse

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    parser = argparse.ArgumentParser(description="Rock/Paper/Scissors Model Training Script")
    parser.add_argument("--data-dir", default="data/rps", help="Folder with rock/, paper/ and scissors/ images.")
    parser.add_argument("--model", default="simple", choices=["simple", "advanced"], help="Model architecture.")
    parser.add_argument("--epochs", type=int, default=None,
                        help="Number of training epochs (default: 12 simple, 20 advanced).")
    parser.add_argument("--lr", type=float, default=0.001, help="Learning rate.")
    parser.add_argument("--output", default="models/rps_model.pth", help="Where to save the trained model.")
    parser.add_argument("--report-dir", default="reports", help="Where to save evaluation plots.")
    args = parser.parse_args()

    try:
        dataset = RPSDataset.from_directory(args.data_dir)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {e}")
        return

    report_dir = Path(args.report_dir)
    from ..visualization.plots import plot_examples
    examples = dataset.next_test_batch(min(42, dataset.num_test))
    plot_examples(examples.images, report_dir / "examples.png", examples.labels)

    classifier = TorchClassifier.create(args.model, args.lr)
    report_accuracy(classifier, dataset, "Untrained Accuracy", report_dir,
                    test_size=min(TEST_DATA_SIZE, dataset.num_test))
    report_confusion(classifier, dataset, "Untrained Matrix", report_dir,
                     test_size=min(TEST_DATA_SIZE, dataset.num_test))

    config = {
        'learning_rate': args.lr,
        'num_epochs': args.epochs if args.epochs is not None else EPOCHS_BY_MODEL[args.model],
    }
    RPSTrainer(config).train(classifier, dataset)

    report_accuracy(classifier, dataset, "Trained Accuracy", report_dir,
                    test_size=min(TEST_DATA_SIZE, dataset.num_test))
    report_confusion(classifier, dataset, "Trained Confusion Matrix", report_dir,
                     test_size=min(TEST_DATA_SIZE, dataset.num_test))

    classifier.save(args.output)


if __name__ == "__main__":
    os.makedirs("models", exist_ok=True)

    try:
        main()
        logger.info("🎉 Training script finished.")
    except KeyboardInterrupt:
        logger.info("🎉 Training interrupted by user.")

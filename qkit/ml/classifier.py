"""
Variational quantum classifier.

Each sample is encoded on a fresh circuit (Hadamard on every qubit, then a Y
rotation by the feature value in radians), followed by the trainable part: a
ring of CNOTs and, per layer, a Y rotation of every qubit by its parameter.
The prediction for class i is the probability that qubit i reads 1, queried
without collapsing the state.

Training uses central finite differences for the gradient, so each
parameter update costs two circuit evaluations per parameter.

Example:
    X, y = iris_dataset("iris.data")
    X = normalize_min_max(X, 0, 2 * np.pi)
    train_X, train_Y, test_X, test_Y = make_train_test_data_one_hot(X, y, 0.2)
    clf = Classifier(number_of_qubits=4, number_of_layers=5, number_of_classes=3)
    clf.set_training_data(train_X, train_Y)
    clf.train(Adam(5, 4, 0.001), epochs=50)
"""

import logging
from typing import Callable, Optional, Tuple

import numpy as np

from ..core import Circuit
from .optimizer import Optimizer

logger = logging.getLogger(__name__)

GRADIENT_DELTA = 10e-8

TrainingStatusHandler = Callable[[int, float, float, int, int], None]


class Classifier:
    """
    Args:
        number_of_qubits: Circuit width; at least one qubit per feature and class
        number_of_layers: Rows of trainable rotation parameters
        number_of_classes: Output qubits read as class scores
    """

    def __init__(self, number_of_qubits: int, number_of_layers: int, number_of_classes: int):
        if number_of_classes > number_of_qubits:
            raise ValueError(f"number_of_classes ({number_of_classes}) cannot exceed "
                             f"number_of_qubits ({number_of_qubits})")
        self.number_of_qubits = number_of_qubits
        self.number_of_layers = number_of_layers
        self.number_of_classes = number_of_classes

        self.train_X = None
        self.train_Y = None
        self.theta = np.full((number_of_layers, number_of_qubits), np.pi)
        self.training_status_handler: Optional[TrainingStatusHandler] = None

    def set_training_data(self, X, Y):
        """X: features per sample; Y: one-hot targets per sample."""
        X = np.asarray(X, dtype=float)
        if X.shape[1] > self.number_of_qubits:
            raise ValueError(f"{X.shape[1]} features do not fit on {self.number_of_qubits} qubits")
        self.train_X = X
        self.train_Y = np.asarray(Y, dtype=float)

    def set_training_status_handler(self, handler: TrainingStatusHandler):
        """handler(epoch, loss, accuracy, correct, total) is called after each epoch."""
        self.training_status_handler = handler

    # -------------------------------------------------------------------------
    # Circuit
    # -------------------------------------------------------------------------

    def feature_map(self, x) -> Circuit:
        circuit = Circuit(self.number_of_qubits)
        circuit.assign_qubits(self.number_of_qubits, "register")

        for i in range(self.number_of_qubits):
            circuit.had(1 << i)
        for i, v in enumerate(x):
            circuit.rot_y(1 << i, 0, np.degrees(v))
        return circuit

    def variational_circuit(self, circuit: Circuit, theta):
        n = circuit.qubit_count
        if n > 1:
            for j in range(n - 1):
                circuit.not_(1 << (j + 1), 1 << j)
            circuit.not_(1, 1 << (n - 1))

        for layer in theta:
            for j, t in enumerate(layer):
                circuit.rot_y(1 << j, 0, np.degrees(t))

    def quantum_nn(self, x, theta) -> np.ndarray:
        """Class probabilities for one sample under parameters theta."""
        circuit = self.feature_map(x)
        self.variational_circuit(circuit, theta)
        return np.array([circuit.probability(1 << i)[1] for i in range(self.number_of_classes)])

    # -------------------------------------------------------------------------
    # Training
    # -------------------------------------------------------------------------

    @staticmethod
    def cross_entropy_loss(prediction, target) -> float:
        prediction = np.asarray(prediction, dtype=float)
        normalized = np.clip(prediction / prediction.sum(), 1e-12, None)
        return float(-np.sum(np.asarray(target) * np.log(normalized)))

    def gradient(self, x, y) -> np.ndarray:
        grad = np.zeros_like(self.theta)
        for i in range(self.theta.shape[0]):
            for j in range(self.theta.shape[1]):
                plus = self.theta.copy()
                minus = self.theta.copy()
                plus[i, j] += GRADIENT_DELTA
                minus[i, j] -= GRADIENT_DELTA
                loss_plus = self.cross_entropy_loss(self.quantum_nn(x, plus), y)
                loss_minus = self.cross_entropy_loss(self.quantum_nn(x, minus), y)
                grad[i, j] = (loss_plus - loss_minus) / (GRADIENT_DELTA * 2)
        return grad

    def train(self, optimizer: Optimizer, epochs: int):
        """
        Reset theta to π and run the given number of epochs of per-sample updates.

        Returns:
            Mean training loss per epoch
        """
        if self.train_X is None:
            raise ValueError("no training data, call set_training_data first")

        self.theta = np.full((self.number_of_layers, self.number_of_qubits), np.pi)
        losses = []

        for epoch in range(1, epochs + 1):
            epoch_losses = []
            for x, y in zip(self.train_X, self.train_Y):
                prediction = self.quantum_nn(x, self.theta)
                epoch_losses.append(self.cross_entropy_loss(prediction, y))
                self.theta = self.theta - optimizer.gradient(self.gradient(x, y))
            losses.append(float(np.mean(epoch_losses)))

            acc, correct, total = self.accuracy(self.train_X, self.train_Y)
            logger.debug("epoch %d loss %.6f train acc %.4f (%d/%d)", epoch, losses[-1], acc, correct, total)
            if self.training_status_handler is not None:
                self.training_status_handler(epoch, losses[-1], acc, correct, total)

        return losses

    # -------------------------------------------------------------------------
    # Inference
    # -------------------------------------------------------------------------

    def predict(self, X) -> np.ndarray:
        return np.array([self.quantum_nn(x, self.theta) for x in X])

    def accuracy(self, X, Y) -> Tuple[float, int, int]:
        """(fraction correct, correct, total) comparing argmax of prediction and target."""
        correct = 0
        for x, y in zip(X, Y):
            if np.argmax(self.quantum_nn(x, self.theta)) == np.argmax(y):
                correct += 1
        total = len(X)
        return (correct / total if total else 0.0), correct, total

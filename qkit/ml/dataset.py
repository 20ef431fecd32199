"""
Dataset loading and preprocessing for the variational classifier.

Features are 2-D float arrays (samples x features); labels are 1-D float
arrays of class numbers. Anything random takes a numpy Generator so splits
are reproducible.
"""

import csv
from typing import List, Optional, Tuple

import numpy as np

IRIS_CLASSES = {"Iris-setosa": 0, "Iris-versicolor": 1, "Iris-virginica": 2}
IRIS_FEATURES = 4


def iris_dataset(file_path: str, limit: int = -1) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load the UCI Iris CSV (four numeric columns, then the species name).

    Args:
        file_path: Path to iris.data
        limit: Only read this many rows (all when <= 0)

    Returns:
        (X, y) with X of shape (n, 4) and y the class numbers

    Raises:
        ValueError: On a malformed row or unknown species
    """
    rows = []
    with open(file_path, newline="") as f:
        for record in csv.reader(f):
            if not record:
                continue
            rows.append(record)
            if 0 < limit <= len(rows):
                break

    X = np.zeros((len(rows), IRIS_FEATURES))
    y = np.zeros(len(rows))
    for i, record in enumerate(rows):
        if len(record) < IRIS_FEATURES + 1:
            raise ValueError(f"{file_path}: row {i + 1} has {len(record)} columns, expected {IRIS_FEATURES + 1}")
        X[i] = [float(v) for v in record[:IRIS_FEATURES]]
        name = record[IRIS_FEATURES].strip()
        if name not in IRIS_CLASSES:
            raise ValueError(f"{file_path}: row {i + 1} has unknown class {name!r}")
        y[i] = IRIS_CLASSES[name]
    return X, y


# =============================================================================
# Normalisation
# =============================================================================

def normalize_min_max(data, range_min: float, range_max: float) -> np.ndarray:
    """Scale all values linearly so the global min/max map to range_min/range_max."""
    data = np.asarray(data, dtype=float)
    lo, hi = data.min(), data.max()
    if hi == lo:
        return np.full_like(data, range_min)
    return (data - lo) / (hi - lo) * (range_max - range_min) + range_min


def normalize(data) -> np.ndarray:
    """Z-score a 1-D array (population standard deviation)."""
    data = np.asarray(data, dtype=float)
    return (data - data.mean()) / data.std()


def normalize_mat(data) -> np.ndarray:
    """Z-score a 2-D array using its global mean and standard deviation."""
    data = np.asarray(data, dtype=float)
    return (data - data.mean()) / data.std()


def one_hot(labels) -> np.ndarray:
    """One-hot encode labels; column order is the sorted label values."""
    labels = np.asarray(labels)
    classes = np.unique(labels)
    return (labels[:, None] == classes[None, :]).astype(float)


# =============================================================================
# Splitting
# =============================================================================

def shuffle_data(X, y, rng: Optional[np.random.Generator] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Shuffle samples and labels with the same permutation."""
    rng = rng if rng is not None else np.random.default_rng()
    X = np.asarray(X)
    y = np.asarray(y)
    order = rng.permutation(len(X))
    return X[order], y[order]


def slice_by_class(X, y) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """Group samples by label, classes in order of first appearance."""
    X = np.asarray(X)
    y = np.asarray(y)
    classes = list(dict.fromkeys(y.tolist()))
    return [X[y == c] for c in classes], [y[y == c] for c in classes]


def make_train_test_data(X, y, test_data_ratio: float,
                         rng: Optional[np.random.Generator] = None):
    """
    Stratified split: the first (1 - ratio) of each class goes to training,
    the rest to test; both sets are then shuffled.

    Returns:
        (train_X, train_y, test_X, test_y)
    """
    if not 0.0 <= test_data_ratio <= 1.0:
        raise ValueError(f"test_data_ratio must be in [0, 1], got {test_data_ratio}")
    rng = rng if rng is not None else np.random.default_rng()

    x_classes, y_classes = slice_by_class(X, y)
    train_X, train_y, test_X, test_y = [], [], [], []
    for xc, yc in zip(x_classes, y_classes):
        limit = int(len(xc) * (1.0 - test_data_ratio))
        train_X.append(xc[:limit])
        train_y.append(yc[:limit])
        test_X.append(xc[limit:])
        test_y.append(yc[limit:])

    train_X, train_y = shuffle_data(np.concatenate(train_X), np.concatenate(train_y), rng)
    test_X, test_y = shuffle_data(np.concatenate(test_X), np.concatenate(test_y), rng)
    return train_X, train_y, test_X, test_y


def make_train_test_data_one_hot(X, y, test_data_ratio: float,
                                 rng: Optional[np.random.Generator] = None):
    """make_train_test_data with one-hot labels over all classes present in y."""
    classes = np.unique(np.asarray(y))
    train_X, train_y, test_X, test_y = make_train_test_data(X, y, test_data_ratio, rng)

    def encode(labels):
        return (np.asarray(labels)[:, None] == classes[None, :]).astype(float)

    return train_X, encode(train_y), test_X, encode(test_y)

"""
Variational quantum classifier built on the qkit circuit engine.

Modules:
    classifier - Classifier (feature map, variational layers, training)
    optimizer  - Optimizer interface and Adam
    dataset    - Iris loader, normalisation, one-hot, train/test split
"""

from .classifier import Classifier
from .optimizer import Optimizer, Adam
from .dataset import (
    iris_dataset,
    normalize_min_max,
    normalize,
    normalize_mat,
    one_hot,
    shuffle_data,
    slice_by_class,
    make_train_test_data,
    make_train_test_data_one_hot,
)

__all__ = [
    "Classifier",
    "Optimizer",
    "Adam",
    "iris_dataset",
    "normalize_min_max",
    "normalize",
    "normalize_mat",
    "one_hot",
    "shuffle_data",
    "slice_by_class",
    "make_train_test_data",
    "make_train_test_data_one_hot",
]

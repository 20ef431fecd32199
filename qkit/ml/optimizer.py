"""
Gradient-based optimizers for the variational classifier.

An optimizer turns a gradient (one row per layer, one column per qubit) into
the step to subtract from the parameters.
"""

import numpy as np

ADAM_BETA1 = 0.9
ADAM_BETA2 = 0.999
ADAM_EPSILON = 10e-8


class Optimizer:
    """Interface: gradient(grad) -> delta, same shape as grad."""

    def gradient(self, grad) -> np.ndarray:
        raise NotImplementedError


class Adam(Optimizer):
    """
    Adam with bias correction.

    The first step initialises the moments to the first gradient (and its
    square) instead of decaying them from zero.
    """

    def __init__(self, number_of_layers: int, number_of_params: int, learning_rate: float = 0.001,
                 beta1: float = ADAM_BETA1, beta2: float = ADAM_BETA2, epsilon: float = ADAM_EPSILON):
        self.m = np.zeros((number_of_layers, number_of_params))
        self.v = np.zeros((number_of_layers, number_of_params))
        self.t = 1
        self.learning_rate = learning_rate
        self.beta1 = beta1
        self.beta2 = beta2
        self.epsilon = epsilon

    def gradient(self, grad) -> np.ndarray:
        grad = np.asarray(grad, dtype=float)
        if grad.shape != self.m.shape:
            raise ValueError(f"gradient shape {grad.shape} does not match parameters {self.m.shape}")

        if self.t == 1:
            self.m = grad.copy()
            self.v = grad * grad
        else:
            self.m = self.beta1 * self.m + (1 - self.beta1) * grad
            self.v = self.beta2 * self.v + (1 - self.beta2) * grad * grad

        mh = self.m / (1 - self.beta1 ** self.t)
        vh = self.v / (1 - self.beta2 ** self.t)
        self.t += 1

        return self.learning_rate / np.sqrt(vh + self.epsilon) * mh

## streaming estimator contract

from typing import Iterable

import numpy as np


class Estimator:
    """Statistic computed incrementally over a stream of samples.

    All arithmetic happens in `dtype`, a numpy floating point scalar type
    such as np.float32 or np.float64. Python float maps to np.float64.
    """

    def __init__(self, dtype=np.float64):
        self.dtype = scalar_type(dtype)
        self.reset()

    def evaluate(self):
        """Current estimate. Zero before any update."""
        raise NotImplementedError

    def update(self, sample) -> None:
        """Incorporate one new observation.

        The sample goes through `dtype(sample)`, so anything numpy can
        convert is accepted, numeric strings included.
        """
        raise NotImplementedError

    def reset(self) -> None:
        """Return to the pristine, zero-sample state."""
        raise NotImplementedError

    def update_all(self, samples: Iterable) -> None:
        for sample in samples:
            self.update(sample)

    def zero(self):
        return self.dtype(0)

    def cast(self, value):
        return self.dtype(value)


def scalar_type(dtype) -> type:
    """Resolve `dtype` to a numpy floating point scalar type.

    None is rejected even though numpy reads it as float64.
    """
    if dtype is None:
        raise TypeError('estimator dtype must be floating point, got None')
    try:
        scalar = np.dtype(dtype).type
    except TypeError:
        scalar = None
    if scalar is None or not issubclass(scalar, np.floating):
        raise TypeError(f'estimator dtype must be floating point, got {dtype!r}')
    return scalar

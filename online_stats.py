## running mean & mean squared error

from estimator import Estimator


class Average(Estimator):
    """Running arithmetic mean.

    Each update shrinks the old mean by n-1/n and adds the new sample
    weighted by 1/n, so no history is kept.
    """

    def reset(self) -> None:
        self.state = self.zero()
        self.num_samples = 0

    def evaluate(self):
        return self.state

    def update(self, sample) -> None:
        sample = self.cast(sample)
        old_n = self.cast(self.num_samples)
        self.num_samples += 1
        new_n = self.cast(self.num_samples)
        self.state = self.state * (old_n / new_n)
        self.state = self.state + sample / new_n

    def __repr__(self):
        return f'<Average mean={self.state} n={self.num_samples}>'


class MeanSquaredError(Estimator):
    """Running mean squared error around the running mean.

    Tracks the mean of squared samples next to an embedded Average and
    returns their difference, the biased (population) variance. Both
    accumulators share the sample counter of `average`.

    Nearly constant streams can evaluate to a tiny negative number through
    cancellation. It is not clamped; clamp at the call site if needed.
    """

    def reset(self) -> None:
        self.average = Average(self.dtype)
        self.state = self.zero()

    @property
    def num_samples(self) -> int:
        return self.average.num_samples

    def evaluate(self):
        mean = self.average.state
        return self.state - mean * mean

    def update(self, sample) -> None:
        sample = self.cast(sample)
        average = self.average
        old_n = self.cast(average.num_samples)
        average.num_samples += 1
        new_n = self.cast(average.num_samples)
        ratio = old_n / new_n
        self.state = self.state * ratio
        self.state = self.state + sample * sample / new_n
        average.state = average.state * ratio
        average.state = average.state + sample / new_n

    def __repr__(self):
        return (f'<MeanSquaredError mse={self.evaluate()} '
                f'mean={self.average.state} n={self.num_samples}>')

"""Convergence of streaming estimators on simulated Gaussian streams.

Each trial draws a stream with random mean and deviation, feeds it to
every estimator one sample at a time and records the absolute error
against the closed-form statistic over the same prefix of samples.
"""

import logging
from collections import defaultdict
from typing import Dict, Optional

import numpy as np
import pandas as pd
import plotly.express as px

from estimator import Estimator
from online_stats import Average, MeanSquaredError

log = logging.getLogger(__name__)

num_trials = 10
horizon = 10000
plot_every = 100
# error after the first sample is exactly 0, which a log axis cannot show
plot_start = 1
output = 'convergence.html'


class GaussianStream:
    """Stream of normally distributed samples."""

    def __init__(self, mean: float, std: float, rng: Optional[np.random.Generator] = None):
        self.mean = mean
        self.std = std
        self.rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def random(cls, rng: Optional[np.random.Generator] = None) -> 'GaussianStream':
        """Stream with mean and deviation drawn uniformly from [0, 1)."""
        rng = rng if rng is not None else np.random.default_rng()
        return cls(rng.uniform(), rng.uniform(), rng)

    def sample(self) -> float:
        return self.rng.normal(self.mean, self.std)


def closed_form(estimator: Estimator, samples: np.ndarray) -> np.ndarray:
    """Batch statistic for every prefix of `samples`, in float64."""
    n = np.arange(1, len(samples) + 1)
    means = np.cumsum(samples) / n
    if isinstance(estimator, MeanSquaredError):
        return np.cumsum(samples ** 2) / n - means ** 2
    if isinstance(estimator, Average):
        return means
    raise TypeError(f'no closed form for {type(estimator).__name__}')


def track(stream: GaussianStream, estimators: Dict[str, Estimator], horizon: int) -> Dict[str, np.ndarray]:
    samples = np.zeros(horizon)
    estimates = {name: np.zeros(horizon) for name in estimators}

    for t in range(horizon):
        sample = stream.sample()
        samples[t] = sample
        for name, estimator in estimators.items():
            estimator.update(sample)
            estimates[name][t] = estimator.evaluate()

    return {
        name: np.abs(estimates[name] - closed_form(estimator, samples))
        for name, estimator in estimators.items()
    }


def convergence_frame(errors: Dict[str, np.ndarray], every: int = 1, start: int = 0) -> pd.DataFrame:
    """Long format table with columns time, estimator, error."""
    d = pd.DataFrame(errors)
    d['time'] = np.arange(len(d))
    d = d.iloc[start::every]
    return d.melt(id_vars='time', var_name='estimator', value_name='error')


def make_estimators() -> Dict[str, Estimator]:
    return {
        'average-f32': Average(np.float32),
        'average-f64': Average(np.float64),
        'mse-f32': MeanSquaredError(np.float32),
        'mse-f64': MeanSquaredError(np.float64),
    }


def main(num_trials=num_trials, horizon=horizon, output=output, seed=None):
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')
    rng = np.random.default_rng(seed)

    errors = defaultdict(list)
    for trial in range(num_trials):
        stream = GaussianStream.random(rng)
        log.info('trial %d/%d: mean=%.3f std=%.3f', trial + 1, num_trials, stream.mean, stream.std)
        for name, err in track(stream, make_estimators(), horizon).items():
            errors[name].append(err)

    avgs = {name: np.mean(x, 0) for name, x in errors.items()}
    for name, err in avgs.items():
        log.info('%s: final error %.3g', name, err[-1])

    d = convergence_frame(avgs, every=plot_every, start=plot_start)
    fig = px.line(d, x='time', y='error', color='estimator', log_y=True,
                  title=f'Absolute error vs. closed form (average of {num_trials} trials).')
    fig.write_html(output)
    log.info('wrote %s', output)
    return d


if __name__ == '__main__':
    main()

import numpy as np


def dummy_int_float_samples(size=1000):
    np.random.seed(42)
    counts = np.random.poisson(4.0, size=size)
    energy = np.random.exponential(3.0, size=size)
    return (counts, energy)

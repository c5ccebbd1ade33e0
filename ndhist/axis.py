"""Per-dimension binning

A `MinMaxBins` describes one dimension of a histogram: its value range and the
number of uniform buckets it is split into. Its ``index`` method quantizes raw
values of that dimension into bucket indices.
"""
import numbers
from dataclasses import dataclass

import numpy


@dataclass(frozen=True)
class MinMaxBins:
    """Range and bucket count of one histogram dimension

    Parameters
    ----------
        min : int or float
            Values at or below ``min`` land in the first bucket
        max : int or float
            Values at or above ``max`` land in the last bucket, must be greater than ``min``
        bins : int
            Number of buckets, at least 1

    Interior values map to ``round(value * (bins - 1) / (max - min))``, computed
    in double precision with ties rounded away from zero. The value itself is scaled,
    not its offset from ``min``, so the interior mapping is only linear between
    the bounds when ``min`` is zero.
    """

    min: numbers.Real
    max: numbers.Real
    bins: int

    def __post_init__(self):
        for bound in ("min", "max"):
            value = getattr(self, bound)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise TypeError(f"{bound} must be a real number, received {value!r}")
        if isinstance(self.bins, bool) or not isinstance(self.bins, numbers.Integral):
            raise TypeError(f"bins must be an integer, received {self.bins!r}")
        if not self.min < self.max:
            raise ValueError(
                f"min should be < max, got min={self.min!r}, max={self.max!r}"
            )
        if self.bins < 1:
            raise ValueError(f"bins must be > 0, got {self.bins!r}")

    def __repr__(self):
        return f"MinMaxBins(min={self.min!r}, max={self.max!r}, bins={self.bins!r})"

    def index(self, value):
        """Bucket index of a value, or of each element of a 1-D array of values

        Scalars return a python int, arrays an int64 array of the same shape.
        NaN has no bucket and raises ValueError.
        """
        array = numpy.asarray(value, dtype="d")
        if numpy.any(numpy.isnan(array)):
            raise ValueError(f"Cannot bin NaN along dimension {self!r}")
        scaled = array * float(self.bins - 1) / float(self.max - self.min)
        idx = numpy.sign(scaled) * numpy.floor(numpy.abs(scaled) + 0.5)
        idx = numpy.where(array <= self.min, 0, idx)
        idx = numpy.where(array >= self.max, self.bins - 1, idx)
        if idx.ndim == 0:
            return int(idx)
        return idx.astype(numpy.int64)

"""Flattening of per-dimension bucket indices into one storage index"""
import functools
import logging
import operator

import numpy

from ndhist.axis import MinMaxBins

logger = logging.getLogger(__name__)


def number_of_bins(*descriptors):
    """Total number of buckets spanned by a set of dimensions"""
    if len(descriptors) == 0:
        raise ValueError("At least one dimension is required")
    return functools.reduce(operator.mul, (d.bins for d in descriptors), 1)


class IndexFunction:
    """Maps an N-tuple of sample values to one linear bucket index

    Parameters
    ----------
        *descriptors : MinMaxBins
            One descriptor per dimension, in the order values are passed

    The first dimension varies fastest: for dimensions with bucket counts
    ``(n0, n1, ..., nk)`` and per-dimension indices ``(i0, i1, ..., ik)`` the
    linear index is ``i0 + n0 * (i1 + n1 * (... + n(k-1) * ik))``.

    Instances hold no state besides their descriptors, so one index function
    can back any number of histograms.
    """

    def __init__(self, *descriptors):
        if not all(isinstance(d, MinMaxBins) for d in descriptors):
            raise TypeError("All dimensions must be described by MinMaxBins objects")
        self._nbins = number_of_bins(*descriptors)
        self._descriptors = tuple(descriptors)
        logger.debug(
            "Built index function over %d dimension(s), %d buckets",
            len(self._descriptors),
            self._nbins,
        )

    def __repr__(self):
        return "<%s (%s) instance at 0x%0x>" % (
            self.__class__.__name__,
            ",".join(str(d.bins) for d in self._descriptors),
            id(self),
        )

    def __eq__(self, other):
        if isinstance(other, IndexFunction):
            return self._descriptors == other._descriptors
        return NotImplemented

    def __hash__(self):
        return hash(self._descriptors)

    @property
    def descriptors(self):
        return self._descriptors

    @property
    def nbins(self):
        """Size of the codomain, the product of all bucket counts"""
        return self._nbins

    @property
    def shape(self):
        return tuple(d.bins for d in self._descriptors)

    def dim(self):
        return len(self._descriptors)

    def __call__(self, *values):
        if len(values) != len(self._descriptors):
            raise ValueError(
                f"Expected {len(self._descriptors)} values, one per dimension, received {len(values)}"
            )
        index = 0
        for descriptor, value in zip(reversed(self._descriptors), reversed(values)):
            index = descriptor.index(value) + descriptor.bins * index
        return index

    def unravel(self, index):
        """Per-dimension bucket indices of a linear index, first dimension first"""
        if numpy.any(numpy.less(index, 0)) or numpy.any(
            numpy.greater_equal(index, self._nbins)
        ):
            raise IndexError(f"Index {index!r} out of range for {self._nbins} buckets")
        out = numpy.unravel_index(index, self.shape, order="F")
        if numpy.ndim(index) == 0:
            return tuple(int(i) for i in out)
        return out

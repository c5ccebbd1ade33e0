import logging
import numbers
import warnings

import numpy

from ndhist.accumulator import AccumulatorABC, accumulate
from ndhist.config import default_config
from ndhist.index import IndexFunction

logger = logging.getLogger(__name__)


class Histogram(AccumulatorABC):
    """A flat array of bins addressed through an index function

    Parameters
    ----------
        nbins : int
            Number of bins, must match the size of the index function's codomain
        index_function : callable
            Maps the sample values passed to `inc` and `value` to a bin index in
            ``[0, nbins)``, usually an `IndexFunction`
        dtype : str or numpy.dtype, optional
            Storage type of the bins, defaults to the configured dtype (double precision)

    The index function is fixed for the lifetime of the histogram and shared
    with its copies. Sample values may be scalars, or 1-D arrays filling one
    bin per element.
    """

    def __init__(self, nbins, index_function, dtype=None):
        if isinstance(nbins, bool) or not isinstance(nbins, numbers.Integral):
            raise TypeError(f"nbins must be an integer, received {nbins!r}")
        if nbins < 1:
            raise ValueError(f"bins should be > 0, got {nbins!r}")
        if index_function is None:
            raise ValueError("An index function is required")
        if not callable(index_function):
            raise TypeError(f"index function {index_function!r} is not callable")
        if isinstance(index_function, IndexFunction) and index_function.nbins != nbins:
            raise ValueError(
                f"Index function spans {index_function.nbins} bins, histogram was given {nbins}"
            )
        config = default_config()
        if dtype is None:
            dtype = config.dtype
        if nbins > config.large_histogram_bins:
            warnings.warn(
                f"Allocating a large (>{config.large_histogram_bins} bin) histogram!",
                RuntimeWarning,
            )
        self._index_function = index_function
        self._bins = numpy.zeros(int(nbins), dtype=dtype)
        logger.debug("Allocated %d bins of type %s", nbins, self._bins.dtype)

    def __repr__(self):
        return "<%s (%d bins, %s) instance at 0x%0x>" % (
            self.__class__.__name__,
            self.nbins,
            self._bins.dtype,
            id(self),
        )

    def __len__(self):
        return self.nbins

    @property
    def nbins(self):
        return len(self._bins)

    @property
    def dtype(self):
        return self._bins.dtype

    @property
    def bins(self):
        """Read-only view of the bin array, in linear index order"""
        view = self._bins.view()
        view.flags.writeable = False
        return view

    @property
    def index_function(self):
        return self._index_function

    def dim(self):
        if isinstance(self._index_function, IndexFunction):
            return self._index_function.dim()
        raise TypeError("Dimensionality is only known for IndexFunction binning")

    def copy(self, content=True):
        """Copy of this histogram sharing the same index function

        With ``content=False`` the copy starts with all bins zero.
        """
        out = self.__class__.__new__(self.__class__)
        out._index_function = self._index_function
        if content:
            out._bins = self._bins.copy()
        else:
            out._bins = numpy.zeros_like(self._bins)
        return out

    __copy__ = copy

    def identity(self):
        return self.copy(content=False)

    def compatible(self, other):
        """Checks if this histogram has as many bins as another"""
        return isinstance(other, Histogram) and other.nbins == self.nbins

    def _locate(self, values):
        index = self._index_function(*values)
        if numpy.any(numpy.less(index, 0)) or numpy.any(
            numpy.greater_equal(index, self.nbins)
        ):
            raise IndexError(
                f"Values {values!r} map to bin {index!r}, outside of [0, {self.nbins})"
            )
        return index

    def _checked(self, other):
        if isinstance(other, Histogram):
            if not self.compatible(other):
                raise ValueError(
                    f"bins size not the same: {other.nbins} (from {other!r}) vs. {self.nbins}"
                )
            # float into int truncates, as for bin sequences
            return other._bins.astype(self._bins.dtype, copy=False)
        try:
            bins = numpy.asarray(other, dtype=self._bins.dtype)
        except (TypeError, ValueError) as ex:
            raise TypeError(f"Cannot interpret {other!r} as bin contents") from ex
        if bins.ndim != 1 or len(bins) != self.nbins:
            raise ValueError(
                f"bins size not the same: {bins.shape} vs. ({self.nbins},)"
            )
        return bins

    def apply(self, func):
        """Replace every bin by ``func(bin)``

        numpy ufuncs are applied to the whole array at once, any other callable
        is called once per bin.
        """
        if isinstance(func, numpy.ufunc):
            self._bins[:] = func(self._bins)
        else:
            self._bins[:] = [func(b) for b in self._bins]
        return self

    def inc_multiplier(self, weight, *values):
        """Add ``weight`` to the bin of each sample"""
        index = self._locate(values)
        numpy.add.at(self._bins, index, weight)
        return self

    def inc(self, *values):
        """Count each sample once"""
        return self.inc_multiplier(1, *values)

    def set(self, value):
        """Overwrite the bins

        ``value`` may be a number (assigned to every bin), a sequence of
        ``nbins`` numbers, or another histogram with as many bins.
        """
        if isinstance(value, numbers.Number):
            self._bins[:] = value
        else:
            self._bins[:] = self._checked(value)
        return self

    def add(self, other):
        """Accumulate into the bins

        ``other`` may be a number (added to every bin), a sequence of
        ``nbins`` numbers, or another histogram with as many bins.
        Values are converted to the bin dtype before being added.
        """
        if isinstance(other, numbers.Number):
            self._bins += self._bins.dtype.type(other)
        else:
            self._bins += self._checked(other)
        return self

    def clear(self):
        self._bins[:] = 0
        return self

    def value(self, *values):
        """Content of the bin of the sample(s)"""
        return self._bins[self._locate(values)]

    def values(self):
        """Copy of the bins shaped by dimension, indexed as ``[i0, i1, ...]``"""
        if not isinstance(self._index_function, IndexFunction):
            raise TypeError("Bin shape is only known for IndexFunction binning")
        return self._bins.reshape(self._index_function.shape, order="F").copy()

    def sum(self):
        """Sum of the absolute values of all bins"""
        return numpy.abs(self._bins).sum()

    def normalize(self):
        """Scale the bins so their absolute values sum up to 1

        Histograms summing to zero are left untouched. Integer bins are
        divided with truncation toward zero.
        """
        total = self.sum()
        if total > 0:
            if self._bins.dtype.kind == "f":
                self._bins /= total
            else:
                self._bins[:] = numpy.trunc(self._bins / total)
        return self

    @staticmethod
    def combine(histograms):
        """New histogram holding the bin-wise sum of the given histograms

        The first histogram is copied, none of the inputs are modified.
        """
        histograms = list(histograms)
        if len(histograms) == 0:
            raise ValueError("cannot add zero histograms")
        for h in histograms:
            if not isinstance(h, Histogram):
                raise TypeError(f"Can only combine histograms, received {h!r}")
        logger.debug("Combining %d histograms", len(histograms))
        return accumulate(histograms[1:], histograms[0].copy())

from ndhist.axis import MinMaxBins
from ndhist.histogram import Histogram
from ndhist.index import IndexFunction, number_of_bins


def uniform_histogram(*descriptors, dtype=None):
    """Histogram with uniform buckets along each dimension

    Parameters
    ----------
        *descriptors : MinMaxBins
            One per dimension, in the order sample values will be passed
        dtype : str or numpy.dtype, optional
            Storage type of the bins, see `Histogram`

    Examples
    --------
    A 2-D histogram of an integer in [0, 10) with 10 buckets and a float in
    [0, 10) with 15 buckets::

        h = uniform_histogram(MinMaxBins(0, 10, 10), MinMaxBins(0.0, 10.0, 15))
        h.inc(5, 5.0)
        h.value(5, 5.0)  # 1.0
    """
    if not all(isinstance(d, MinMaxBins) for d in descriptors):
        raise TypeError("uniform_histogram expects MinMaxBins descriptors")
    return Histogram(
        number_of_bins(*descriptors), IndexFunction(*descriptors), dtype=dtype
    )

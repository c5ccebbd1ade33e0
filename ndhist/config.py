"""User configuration

Defaults for new histograms can be overridden in ``$HOME/.ndhist.toml``::

    [ndhist]
    dtype = "f"
    large_histogram_bins = 1000000
"""
import functools
import logging
import numbers
import os
from dataclasses import asdict, dataclass, fields

import numpy
import toml

from ndhist.logger import json_str

logger = logging.getLogger(__name__)


@dataclass
class HistogramConfig:
    """Defaults applied when constructing histograms

    Parameters
    ----------
        dtype : str
            numpy dtype of the bin storage when none is given explicitly
        large_histogram_bins : int
            allocations with more bins than this emit a RuntimeWarning
    """

    dtype: str = "d"
    large_histogram_bins: int = 10000000

    @staticmethod
    def read_ndhist_config():
        config_path = None
        if "HOME" in os.environ:
            config_path = os.path.join(os.environ["HOME"], ".ndhist.toml")

        if config_path is not None and os.path.exists(config_path):
            with open(config_path) as f:
                return toml.loads(f.read())
        else:
            return dict()

    @classmethod
    def from_file(cls):
        section = cls.read_ndhist_config().get("ndhist", {})
        known = {f.name for f in fields(cls)}
        unknown = set(section) - known
        if unknown:
            raise ValueError(
                "Unrecognized ndhist configuration keys: {}".format(
                    ", ".join(sorted(unknown))
                )
            )
        out = cls(**section)
        logger.debug("Loaded histogram configuration:\n%s", json_str(asdict(out)))
        return out

    def __post_init__(self):
        try:
            dtype = numpy.dtype(self.dtype)
        except TypeError as ex:
            raise ValueError(f"Invalid bin dtype {self.dtype!r}") from ex
        if dtype.kind not in "iuf":
            raise ValueError(
                f"Bin dtype must be an integer or floating point type, got {self.dtype!r}"
            )
        if (
            isinstance(self.large_histogram_bins, bool)
            or not isinstance(self.large_histogram_bins, numbers.Integral)
            or self.large_histogram_bins < 1
        ):
            raise ValueError(
                f"large_histogram_bins must be a positive integer, got {self.large_histogram_bins!r}"
            )


@functools.lru_cache(maxsize=None)
def default_config():
    """The configuration read from disk, loaded once per process"""
    return HistogramConfig.from_file()

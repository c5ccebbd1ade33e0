import copy
import operator
from abc import ABCMeta, abstractmethod
from collections.abc import MutableMapping
from typing import Iterable, Optional, Protocol, TypeVar, Union, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Addable(Protocol):
    def __add__(self: T, other: T) -> T:
        ...


Accumulatable = Union[Addable, MutableMapping]


def add(a: Accumulatable, b: Accumulatable) -> Accumulatable:
    """Add two accumulatables together, without altering inputs

    Mappings (e.g. a dict of named histograms) are added key by key,
    keys present on one side only are deep-copied into the result.
    """
    if isinstance(a, MutableMapping) and isinstance(b, MutableMapping):
        if isinstance(b, type(a)):
            out = copy.copy(a)
        elif isinstance(a, type(b)):
            out = copy.copy(b)
        else:
            raise ValueError(
                f"Cannot add two mappings of incompatible type ({type(a)} vs. {type(b)})"
            )
        out.clear()
        lhs, rhs = set(a), set(b)
        for key in lhs & rhs:
            out[key] = add(a[key], b[key])
        for key in lhs - rhs:
            out[key] = copy.deepcopy(a[key])
        for key in rhs - lhs:
            out[key] = copy.deepcopy(b[key])
        return out
    if isinstance(a, Addable) and isinstance(b, Addable):
        return operator.add(a, b)
    raise ValueError(
        f"Cannot add accumulators of incompatible type ({type(a)} vs. {type(b)})"
    )


def iadd(a: Accumulatable, b: Accumulatable) -> Accumulatable:
    """Add two accumulatables together, assuming the first is mutable"""
    if isinstance(a, MutableMapping) and isinstance(b, MutableMapping):
        if not isinstance(b, type(a)):
            raise ValueError(
                f"Cannot add two mappings of incompatible type ({type(a)} vs. {type(b)})"
            )
        lhs, rhs = set(a), set(b)
        for key in lhs & rhs:
            a[key] = iadd(a[key], b[key])
        for key in rhs - lhs:
            a[key] = copy.deepcopy(b[key])
        return a
    if isinstance(a, Addable) and isinstance(b, Addable):
        return operator.iadd(a, b)
    raise ValueError(
        f"Cannot add accumulators of incompatible type ({type(a)} vs. {type(b)})"
    )


def accumulate(
    items: Iterable[Optional[Accumulatable]], accum: Optional[Accumulatable] = None
) -> Optional[Accumulatable]:
    """Reduce partial results, e.g. histograms filled by separate workers

    ``None`` items are skipped. Without ``accum`` the first item is not mutated.
    """
    gen = (x for x in items if x is not None)
    try:
        if accum is None:
            accum = next(gen)
            # produce a new object so that the input is not mutated
            accum = add(accum, next(gen))
        while True:
            accum = iadd(accum, next(gen))
    except StopIteration:
        pass
    return accum


class AccumulatorABC(metaclass=ABCMeta):
    """Abstract base class for an accumulator

    An accumulator can create an empty copy of itself (``identity()``) and add a
    compatible accumulator into itself (``add()``). That is all the reduce stage
    needs when partial histograms are filled separately and merged afterwards::

        from ndhist import MinMaxBins, uniform_histogram

        empty = uniform_histogram(MinMaxBins(0, 100, 50))

        def fill(samples):
            h = empty.identity()
            for x in samples:
                h.inc(x)
            return h

        combined = sum(map(fill, chunks), empty.identity())

    Derived classes must implement
        - ``identity()``: returns a new object of same type as self,
          such that ``self + self.identity() == self``
        - ``add(other)``: adds an object of same type as self to self

    Concrete implementations are then provided for ``__add__``, ``__radd__``, and ``__iadd__``.
    """

    @abstractmethod
    def identity(self):
        """Identity of the accumulator

        A value such that any other value added to it will return
        the other value
        """
        pass

    @abstractmethod
    def add(self, other):
        """Add another accumulator to this one in-place"""
        pass

    def __add__(self, other):
        ret = self.identity()
        ret.add(self)
        ret.add(other)
        return ret

    def __radd__(self, other):
        ret = self.identity()
        ret.add(other)
        ret.add(self)
        return ret

    def __iadd__(self, other):
        self.add(other)
        return self

from collections import defaultdict

import numpy as np
import pytest

from ndhist import MinMaxBins, accumulate, uniform_histogram
from ndhist.accumulator import add, iadd


def test_accumulate_histograms():
    empty = uniform_histogram(MinMaxBins(0, 100, 50))

    def fill(samples):
        h = empty.identity()
        for x in samples:
            h.inc(x)
        return h

    chunks = [[1, 2, 3], [50, 60], [], [99, 150]]
    partials = [fill(chunk) for chunk in chunks]
    out = accumulate(partials)
    assert out.sum() == 7.0
    assert out is not partials[0]
    assert partials[0].sum() == 3.0
    assert np.array_equal(out.bins, sum(partials, empty.identity()).bins)

    assert accumulate([None, partials[1], None]) is partials[1]
    assert accumulate([]) is None


def test_accumulate_mappings():
    a = uniform_histogram(MinMaxBins(0.0, 1.0, 5))
    b = a.identity()
    a.inc(0.1)
    b.inc(0.9)

    out = accumulate(
        (
            {"signal": a},
            {"signal": b, "background": b},
        )
    )
    assert set(out) == {"signal", "background"}
    assert out["signal"].sum() == 2.0
    assert out["background"].sum() == 1.0
    # keys present on one side are copies
    assert out["background"] is not b
    assert a.sum() == 1.0

    merged = add({"x": 2}, {"x": 3, "y": 1})
    assert merged == {"x": 5, "y": 1}

    target = defaultdict(float, {"x": 1.0})
    assert iadd(target, defaultdict(float, {"x": 1.0, "z": 3.0})) is target
    assert target == {"x": 2.0, "z": 3.0}


def test_accumulator_types():
    class MyDict(dict):
        pass

    out = accumulate(
        (
            {"x": 2},
            MyDict({"x": 3}),
        )
    )
    assert type(out) is dict

    with pytest.raises(ValueError):
        accumulate(
            (
                defaultdict(lambda: 2),
                MyDict({"x": 3}),
            )
        )

    with pytest.raises(ValueError):
        add({"x": 1}, 3)

import logging

import pytest

from ndhist.logger import ModuleFilter, json_str, setup_logger


def test_invalid_level():
    null_level = "NOT_ALLOWED"
    with pytest.raises(ValueError):
        setup_logger(level=null_level)


def test_filter():
    def record(name):
        return logging.LogRecord(name, logging.DEBUG, __file__, 1, "msg", None, None)

    filt = ModuleFilter()
    assert filt.filter(record("ndhist.histogram"))
    assert not filt.filter(record("numpy"))

    filt = ModuleFilter(["numpy"])
    assert filt.filter(record("numpy.core"))
    assert filt.filter(record("ndhist"))


def test_json_str():
    assert json_str({"b": 1, "a": 2}) == '{\n    "a": 2,\n    "b": 1\n}'


def test_logfile(tmp_path):
    from ndhist import MinMaxBins, uniform_histogram

    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    logfile = tmp_path / "ndhist.log"
    added = []
    try:
        setup_logger(level="DEBUG", logfile=str(logfile))
        uniform_histogram(MinMaxBins(0, 10, 10))
        logging.getLogger("numpy").debug("not shown")
        added = root.handlers[len(handlers) :]
    finally:
        for handler in root.handlers[len(handlers) :]:
            root.removeHandler(handler)
            handler.close()
        root.setLevel(level)
    assert len(added) == 2
    assert added[-1].console.file.closed
    assert not added[0].console.file.closed
    text = logfile.read_text()
    assert "Allocated" in text
    assert "not shown" not in text

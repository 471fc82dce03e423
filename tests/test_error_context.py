import threading

import pytest

from edcore.error_context import ErrorContext, current_stack


def test_push_and_pop():
    before = current_stack()
    with ErrorContext("Start server", "init"):
        assert current_stack() == before + [("Start server", "init")]
    assert current_stack() == before


def test_nested_order():
    with ErrorContext("outer", None):
        with ErrorContext("inner", "v"):
            assert current_stack()[-2:] == [("outer", None), ("inner", "v")]
        assert current_stack()[-1] == ("outer", None)


def test_change_replaces_top():
    with ErrorContext("Start server", "init") as ctx:
        ctx.change("Start server", "configure")
        assert current_stack()[-1] == ("Start server", "configure")


def test_change_without_context_raises():
    assert current_stack() == []
    with pytest.raises(RuntimeError):
        ErrorContext("x").change("y", "z")


def test_pops_on_exception():
    with pytest.raises(ValueError):
        with ErrorContext("failing"):
            raise ValueError("boom")
    assert ("failing", None) not in current_stack()


def test_threads_have_separate_stacks():
    results = {}

    def worker():
        results["before"] = current_stack()
        with ErrorContext("worker", "run"):
            results["inside"] = current_stack()

    with ErrorContext("main"):
        t = threading.Thread(target=worker)
        t.start()
        t.join()
        assert current_stack() == [("main", None)]

    assert results["before"] == []
    assert results["inside"] == [("worker", "run")]
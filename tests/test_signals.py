import pytest

from backend.signals import Signal


def test_emit_calls_in_connection_order():
    calls = []
    sig = Signal("changed")
    sig.connect(lambda: calls.append(1))
    sig.connect(lambda: calls.append(2))
    sig.emit()
    assert calls == [1, 2]


def test_connect_is_idempotent():
    calls = []
    sig = Signal()

    def cb():
        calls.append("x")

    sig.connect(cb)
    sig.connect(cb)
    sig.emit()
    assert calls == ["x"]
    assert len(sig) == 1


def test_disconnect():
    calls = []
    sig = Signal()
    cb = sig.connect(lambda: calls.append("x"))
    sig.disconnect(cb)
    sig.emit()
    assert calls == []
    with pytest.raises(ValueError):
        sig.disconnect(cb)


def test_callback_may_disconnect_itself():
    calls = []
    sig = Signal()

    def once():
        calls.append("once")
        sig.disconnect(once)

    sig.connect(once)
    sig.emit()
    sig.emit()
    assert calls == ["once"]


def test_callback_errors_propagate():
    sig = Signal()

    def boom():
        raise RuntimeError("listener failed")

    sig.connect(boom)
    with pytest.raises(RuntimeError):
        sig.emit()

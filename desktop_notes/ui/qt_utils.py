from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def blocked_signals(obj):
    """
    Temporarily silence a widget's signals, e.g. while the window writes
    session state back into the editor fields.
    """
    if obj is None:
        yield
        return
    obj.blockSignals(True)
    try:
        yield
    finally:
        obj.blockSignals(False)

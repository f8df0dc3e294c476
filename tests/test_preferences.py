from desktop_notes.ui.preferences import (
    SettingsKeys,
    coerce_sizes,
    normalize_theme,
    restore_window_state,
    save_window_state,
)


class DictSettings:
    def __init__(self, values=None):
        self.values = dict(values or {})

    def value(self, key, default=None):
        return self.values.get(key, default)

    def setValue(self, key, value):
        self.values[key] = value


class FakeWindow:
    def __init__(self):
        self.calls = []

    def saveGeometry(self):
        return b"geo"

    def saveState(self):
        return b"state"

    def restoreGeometry(self, geo):
        self.calls.append(("geometry", geo))

    def restoreState(self, state):
        self.calls.append(("state", state))

    def resize(self, w, h):
        self.calls.append(("resize", (w, h)))


class FakeSplitter:
    def __init__(self, sizes=(300, 900)):
        self._sizes = list(sizes)

    def sizes(self):
        return list(self._sizes)

    def setSizes(self, sizes):
        self._sizes = list(sizes)


def test_window_state_round_trip():
    settings = DictSettings()
    save_window_state(settings, FakeWindow(), FakeSplitter((250, 950)))

    assert settings.values[SettingsKeys.UI_STATE] == b"state"

    window, splitter = FakeWindow(), FakeSplitter()
    restore_window_state(settings, window, splitter)

    assert window.calls == [("geometry", b"geo"), ("state", b"state")]
    assert splitter.sizes() == [250, 950]


def test_restore_without_saved_state_uses_default_size():
    window, splitter = FakeWindow(), FakeSplitter()
    restore_window_state(DictSettings(), window, splitter)

    assert window.calls == [("resize", (1200, 800))]
    assert splitter.sizes() == [300, 900]


def test_coerce_sizes():
    assert coerce_sizes("200,800") == [200, 800]
    assert coerce_sizes(["1", "x", 3]) == [1, 3]
    assert coerce_sizes(None) is None
    assert coerce_sizes(42) is None


def test_normalize_theme():
    assert normalize_theme(" Dark ") == "dark"
    assert normalize_theme("purple") == "light"
    assert normalize_theme(None) == "light"

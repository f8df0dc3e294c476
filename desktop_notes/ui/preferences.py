from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings


@dataclass(frozen=True)
class SettingsKeys:
    UI_THEME: str = "ui/theme"
    UI_GEOMETRY: str = "ui/geometry"
    UI_STATE: str = "ui/windowState"
    UI_SPLITTER: str = "ui/splitter_sizes"


def normalize_theme(name: str | None) -> str:
    name = (name or "").strip().lower()
    return name if name in ("dark", "light") else "light"


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def coerce_sizes(value) -> list[int] | None:
    """QSettings may hand back a list, a tuple or "200,800" depending on backend."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.replace(",", " ").split()
    if not isinstance(value, (list, tuple)):
        return None
    out: list[int] = []
    for x in value:
        try:
            out.append(int(x))
        except (TypeError, ValueError):
            pass
    return out or None


def restore_window_state(settings: QSettings, window, splitter, *, default_size=(1200, 800)) -> None:
    """Geometry, toolbar/dock state and splitter sizes, as saved by save_window_state()."""
    geo = settings.value(SettingsKeys.UI_GEOMETRY)
    if geo:
        window.restoreGeometry(geo)
    else:
        window.resize(*default_size)

    state = settings.value(SettingsKeys.UI_STATE)
    if state:
        window.restoreState(state)

    sizes = coerce_sizes(settings.value(SettingsKeys.UI_SPLITTER))
    if sizes:
        splitter.setSizes(sizes)


def save_window_state(settings: QSettings, window, splitter) -> None:
    settings.setValue(SettingsKeys.UI_GEOMETRY, window.saveGeometry())
    settings.setValue(SettingsKeys.UI_STATE, window.saveState())
    settings.setValue(SettingsKeys.UI_SPLITTER, splitter.sizes())

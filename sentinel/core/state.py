"""Dashboard UI state as immutable values.

Each reducer takes the current ``AppState`` and returns a new one; nothing is
held at module level. Callers own the state object and pass it to the
selectors at the bottom of this module.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Optional

from sentinel.core.constants import ALL, DEFAULT_MAP_CENTER, DEFAULT_MAP_ZOOM
from sentinel.core.filters import RiskCriteria, filter_risks
from sentinel.core.records import read_field
from sentinel.core.stats import compute_alert_stats


@dataclass(frozen=True)
class FilterOptions:
    risk_level: str = ALL
    status: str = ALL
    type: str = ALL
    time_range: str = "24h"

    def to_criteria(self) -> RiskCriteria:
        return RiskCriteria(
            risk_level=self.risk_level,
            status=self.status,
            type=self.type,
            time_range=self.time_range,
        )


@dataclass(frozen=True)
class MapState:
    center: tuple[float, float] = DEFAULT_MAP_CENTER
    zoom: int = DEFAULT_MAP_ZOOM
    selected_alert_id: Optional[str] = None
    show_pipeline: bool = True
    show_heatmap: bool = False


@dataclass(frozen=True)
class UIState:
    sidebar_open: bool = True
    inspection_drawer_open: bool = False
    selected_alert: Optional[object] = None
    theme: str = "light"


@dataclass(frozen=True)
class UserPreferences:
    auto_refresh: bool = True
    refresh_interval: int = 30  # seconds
    notifications: bool = True
    sound_alerts: bool = False


@dataclass(frozen=True)
class AppState:
    selected_alert_id: Optional[str] = None
    filters: FilterOptions = field(default_factory=FilterOptions)
    map_state: MapState = field(default_factory=MapState)
    ui_state: UIState = field(default_factory=UIState)
    preferences: UserPreferences = field(default_factory=UserPreferences)


def _known_changes(target, changes):
    names = {item.name for item in fields(target)}
    unknown = set(changes) - names
    if unknown:
        raise TypeError("Unknown {} fields: {}".format(type(target).__name__, ", ".join(sorted(unknown))))
    return changes


def update_filters(state: AppState, **changes) -> AppState:
    return replace(state, filters=replace(state.filters, **_known_changes(state.filters, changes)))


def reset_filters(state: AppState) -> AppState:
    return replace(state, filters=FilterOptions())


def set_map_state(state: AppState, **changes) -> AppState:
    return replace(state, map_state=replace(state.map_state, **_known_changes(state.map_state, changes)))


def set_selected_alert(state: AppState, alert_id) -> AppState:
    return replace(state, selected_alert_id=alert_id)


def zoom_to_alert(state: AppState, alert_id) -> AppState:
    return replace(
        state,
        selected_alert_id=alert_id,
        map_state=replace(state.map_state, selected_alert_id=alert_id),
    )


def toggle_sidebar(state: AppState) -> AppState:
    return replace(
        state,
        ui_state=replace(state.ui_state, sidebar_open=not state.ui_state.sidebar_open),
    )


def open_inspection_drawer(state: AppState, alert) -> AppState:
    return replace(
        state,
        selected_alert_id=read_field(alert, "id"),
        ui_state=replace(state.ui_state, inspection_drawer_open=True, selected_alert=alert),
    )


def close_inspection_drawer(state: AppState) -> AppState:
    return replace(
        state,
        ui_state=replace(state.ui_state, inspection_drawer_open=False, selected_alert=None),
    )


def update_user_preferences(state: AppState, **changes) -> AppState:
    return replace(
        state,
        preferences=replace(state.preferences, **_known_changes(state.preferences, changes)),
    )


def filtered_alerts(state: AppState, alerts, now=None):
    return filter_risks(alerts, state.filters.to_criteria(), now=now)


def alert_stats(alerts):
    return compute_alert_stats(alerts)


__all__ = [
    "AppState",
    "FilterOptions",
    "MapState",
    "UIState",
    "UserPreferences",
    "alert_stats",
    "close_inspection_drawer",
    "filtered_alerts",
    "open_inspection_drawer",
    "reset_filters",
    "set_map_state",
    "set_selected_alert",
    "toggle_sidebar",
    "update_filters",
    "update_user_preferences",
    "zoom_to_alert",
]

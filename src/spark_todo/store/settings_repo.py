# src/spark_todo/store/settings_repo.py

from __future__ import annotations

import logging

from .connection import Database
from .models import Settings, Theme, ViewMode

logger = logging.getLogger(__name__)

KEY_HIDE_DONE = "hideDone"
KEY_ALWAYS_ON_TOP = "alwaysOnTop"
KEY_VIEW_MODE = "viewMode"
KEY_CONCISE_MODE = "conciseMode"
KEY_THEME = "theme"

# Not a user preference: when the periodic reminder last fired (epoch ms).
KEY_LAST_REMINDER_AT = "lastWaterReminderAt"

# Written once at bootstrap when missing. `theme` is intentionally absent.
DEFAULT_SETTING_VALUES: dict[str, str] = {
    KEY_ALWAYS_ON_TOP: "1",
    KEY_HIDE_DONE: "0",
    KEY_VIEW_MODE: ViewMode.CARDS.value,
    KEY_CONCISE_MODE: "0",
}


def _bool_to_01(value: bool) -> str:
    return "1" if value else "0"


def _parse_bool(raw: str) -> bool:
    raw = raw.strip()
    return raw == "1" or raw.lower() == "true"


class SettingsRepository:
    """
    Key/value settings table.

    Reads start from the built-in defaults and overlay whatever is stored, so a
    missing key never breaks the app and unknown keys are simply ignored.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def get_settings(self) -> Settings:
        rows = self._db.fetch_all("SELECT key, value FROM settings", operation="list settings")
        stored = {str(r["key"]): str(r["value"]) for r in rows}

        defaults = Settings()
        hide_done = defaults.hide_done
        always_on_top = defaults.always_on_top
        view_mode = defaults.view_mode
        concise_mode = defaults.concise_mode
        theme = defaults.theme

        if KEY_HIDE_DONE in stored:
            hide_done = _parse_bool(stored[KEY_HIDE_DONE])
        if KEY_ALWAYS_ON_TOP in stored:
            always_on_top = _parse_bool(stored[KEY_ALWAYS_ON_TOP])
        if KEY_VIEW_MODE in stored:
            view_mode = ViewMode.normalize(stored[KEY_VIEW_MODE])
        if KEY_CONCISE_MODE in stored:
            concise_mode = _parse_bool(stored[KEY_CONCISE_MODE])
        if stored.get(KEY_THEME, "").strip():
            theme = Theme.normalize(stored[KEY_THEME])

        return Settings(
            hide_done=hide_done,
            always_on_top=always_on_top,
            view_mode=view_mode,
            concise_mode=concise_mode,
            theme=theme,
        )

    def set_settings(self, settings: Settings) -> None:
        """
        Upsert every user-facing key on its own.

        A failing key raises StorageError naming that key; keys written before
        it stay written.
        """
        self._set(KEY_ALWAYS_ON_TOP, _bool_to_01(settings.always_on_top))
        self._set(KEY_HIDE_DONE, _bool_to_01(settings.hide_done))
        self._set(KEY_VIEW_MODE, ViewMode.normalize(settings.view_mode))
        self._set(KEY_CONCISE_MODE, _bool_to_01(settings.concise_mode))
        if (settings.theme or "").strip():
            self._set(KEY_THEME, Theme.normalize(settings.theme))

    def get_last_reminder_at(self) -> int:
        """Epoch ms of the last reminder, or 0 if it never fired."""
        row = self._db.fetch_one(
            "SELECT value FROM settings WHERE key = ?",
            (KEY_LAST_REMINDER_AT,),
            operation=f"get {KEY_LAST_REMINDER_AT}",
        )
        if row is None:
            return 0
        raw = str(row["value"]).strip()
        if not raw:
            return 0
        try:
            ts = int(raw)
        except ValueError:
            logger.warning("Ignoring unparsable %s=%r", KEY_LAST_REMINDER_AT, raw)
            return 0
        return ts if ts > 0 else 0

    def set_last_reminder_at(self, ts_ms: int) -> None:
        self._set(KEY_LAST_REMINDER_AT, str(max(0, int(ts_ms))))

    def _set(self, key: str, value: str) -> None:
        self._db.execute(
            """
            INSERT INTO settings(key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
            (key, value),
            operation=f"set setting {key!r}",
        )
        logger.debug("Setting %s=%r", key, value)

"""Banner data manager - history, custom templates, favorites and background images.

All collections live in memory and are written through to a key-value store
as JSON after every mutation. Storage failures are logged and never raised:
the in-memory state stays authoritative.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QObject, Signal

from ibanner.infrastructure.image_codec import ImageCodec, ImageCodecError, default_image_codec
from ibanner.infrastructure.kv_store import KeyValueStore, KeyValueStoreError
from ibanner.models.banner_history import BannerHistory
from ibanner.models.banner_style import BannerStyle, utc_now
from ibanner.models.banner_template import BannerTemplate, TemplateCategory, builtin_templates
from ibanner.utils.config import (
    BACKGROUND_IMAGE_PREFIX,
    BACKGROUND_IMAGE_SUFFIX,
    BACKGROUND_IMAGES_FOLDER,
    CUSTOM_TEMPLATES_KEY,
    FAVORITE_TEMPLATE_IDS_KEY,
    HISTORY_LIST_KEY,
    LAST_USED_STYLE_KEY,
    MAX_HISTORY_COUNT,
    get_data_dir,
)

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


@dataclass(frozen=True, slots=True)
class UsageStatistics:
    history_count: int
    custom_template_count: int
    favorite_count: int


class BannerDataManager(QObject):
    """Persistent store for banner history, templates and favorites.

    Construct one instance at the application root and pass it to the UI.
    Listeners subscribe to the ``*_changed`` signals instead of polling.
    """

    history_changed = Signal()
    templates_changed = Signal()
    favorites_changed = Signal()

    def __init__(
        self,
        store: KeyValueStore,
        data_dir: Path | None = None,
        codec: ImageCodec | None = None,
        max_history_count: int = MAX_HISTORY_COUNT,
        clock: Callable[[], datetime] = utc_now,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._store = store
        self._data_dir = Path(data_dir) if data_dir is not None else get_data_dir()
        self._codec = codec or default_image_codec()
        self._max_history_count = max(1, int(max_history_count))
        self._clock = clock

        self._history: list[BannerHistory] = []
        self._custom_templates: list[BannerTemplate] = []
        self._builtin_templates: list[BannerTemplate] = builtin_templates()
        self._favorite_ids: set[str] = set()

        self._setup_image_directory()
        self.load_all()

    # ------------------------------------------------------------------ Properties

    @property
    def history(self) -> list[BannerHistory]:
        """History entries, newest first."""
        return list(self._history)

    @property
    def builtin_templates(self) -> list[BannerTemplate]:
        return list(self._builtin_templates)

    @property
    def custom_templates(self) -> list[BannerTemplate]:
        return list(self._custom_templates)

    @property
    def favorite_ids(self) -> frozenset[str]:
        return frozenset(self._favorite_ids)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def images_dir(self) -> Path:
        return self._data_dir / BACKGROUND_IMAGES_FOLDER

    @property
    def max_history_count(self) -> int:
        return self._max_history_count

    @max_history_count.setter
    def max_history_count(self, count: int) -> None:
        self._max_history_count = max(1, int(count))
        if len(self._history) > self._max_history_count:
            del self._history[self._max_history_count:]
            self._save_history()
            self.history_changed.emit()

    # ------------------------------------------------------------------ Load

    def load_all(self) -> None:
        """Load every collection from the store; each one fails independently."""
        self._history = self._load_list(HISTORY_LIST_KEY, BannerHistory.from_dict, "history")
        self._history.sort(key=lambda h: h.timestamp, reverse=True)
        del self._history[self._max_history_count:]

        self._custom_templates = [
            t for t in self._load_list(
                CUSTOM_TEMPLATES_KEY, BannerTemplate.from_dict, "custom templates"
            )
            if not t.is_built_in
        ]

        ids = self._load_list(FAVORITE_TEMPLATE_IDS_KEY, str, "favorite template ids")
        known = {t.template_id for t in self._all_templates()}
        self._favorite_ids = {i for i in ids if i in known}
        if len(self._favorite_ids) != len(set(ids)):
            logger.info("Pruned %d stale favorite ids", len(set(ids)) - len(self._favorite_ids))
            self._save_favorites()

        logger.info(
            "Loaded %d history entries, %d custom templates, %d favorites",
            len(self._history), len(self._custom_templates), len(self._favorite_ids),
        )
        self.history_changed.emit()
        self.templates_changed.emit()
        self.favorites_changed.emit()

    def _load_list(self, key: str, decode: Callable, label: str) -> list:
        try:
            raw = self._store.get(key)
            if raw is None:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            return [decode(item) for item in data]
        except (KeyValueStoreError, *_DECODE_ERRORS) as e:
            logger.warning("Failed to load %s, starting empty: %s", label, e)
            return []

    # ------------------------------------------------------------------ Save

    def _write(self, key: str, payload) -> bool:
        try:
            self._store.set(key, json.dumps(payload, ensure_ascii=False))
        except (KeyValueStoreError, TypeError, ValueError) as e:
            logger.error("Failed to save %s: %s", key, e)
            return False
        return True

    def _save_history(self) -> bool:
        return self._write(HISTORY_LIST_KEY, [h.to_dict() for h in self._history])

    def _save_custom_templates(self) -> bool:
        return self._write(CUSTOM_TEMPLATES_KEY, [t.to_dict() for t in self._custom_templates])

    def _save_favorites(self) -> bool:
        return self._write(FAVORITE_TEMPLATE_IDS_KEY, sorted(self._favorite_ids))

    # ------------------------------------------------------------------ History

    def add_history(self, style: BannerStyle) -> BannerHistory:
        """Record *style* as displayed.

        An entry with the same text only gets its timestamp refreshed; otherwise
        a new entry is prepended. The list is kept newest first and capped at
        ``max_history_count``.
        """
        snapshot = style.copy()
        now = self._clock()
        entry = next((h for h in self._history if h.style.text == snapshot.text), None)
        if entry is not None:
            entry.timestamp = now
        else:
            entry = BannerHistory(text=snapshot.text, style=snapshot, timestamp=now)
            self._history.insert(0, entry)

        self._history.sort(key=lambda h: h.timestamp, reverse=True)
        del self._history[self._max_history_count:]
        self._save_history()
        self.history_changed.emit()
        return entry

    def delete_history(self, history_id: str) -> bool:
        before = len(self._history)
        self._history = [h for h in self._history if h.history_id != history_id]
        if len(self._history) == before:
            return False
        self._save_history()
        self.history_changed.emit()
        return True

    def clear_all_history(self) -> None:
        self._history.clear()
        self._save_history()
        self.history_changed.emit()

    def search_history(self, keyword: str) -> list[BannerHistory]:
        """Case-insensitive substring search on history text."""
        if not keyword:
            return self.history
        needle = keyword.casefold()
        return [h for h in self._history if needle in h.style.text.casefold()]

    # ------------------------------------------------------------------ Templates

    def _all_templates(self) -> list[BannerTemplate]:
        return self._builtin_templates + self._custom_templates

    def get_template(self, template_id: str) -> BannerTemplate | None:
        for t in self._all_templates():
            if t.template_id == template_id:
                return t
        return None

    def add_custom_template(
        self,
        name: str,
        style: BannerStyle,
        category: TemplateCategory = TemplateCategory.CUSTOM,
    ) -> BannerTemplate:
        if category is TemplateCategory.ALL:
            category = TemplateCategory.CUSTOM
        snapshot = style.copy()
        template = BannerTemplate(
            name=name,
            text=snapshot.text,
            style=snapshot,
            category=category,
            is_built_in=False,
        )
        self._custom_templates.append(template)
        self._save_custom_templates()
        self.templates_changed.emit()
        logger.debug("Added custom template %s (%s)", template.template_id, name)
        return template

    def delete_custom_template(self, template_id: str) -> bool:
        """Delete a custom template and its favorite mark.

        Built-in and unknown templates are left alone and False is returned.
        """
        template = self.get_template(template_id)
        if template is None or template.is_built_in:
            return False

        self._custom_templates = [
            t for t in self._custom_templates if t.template_id != template_id
        ]
        self._favorite_ids.discard(template_id)
        self._save_custom_templates()
        self._save_favorites()
        self.templates_changed.emit()
        self.favorites_changed.emit()
        return True

    # ------------------------------------------------------------------ Favorites

    def toggle_favorite(self, template_id: str) -> bool:
        """Flip the favorite mark of a template. Returns the new state."""
        if self.get_template(template_id) is None:
            logger.warning("Cannot favorite unknown template %s", template_id)
            return False
        if template_id in self._favorite_ids:
            self._favorite_ids.remove(template_id)
        else:
            self._favorite_ids.add(template_id)
        self._save_favorites()
        self.favorites_changed.emit()
        return template_id in self._favorite_ids

    def is_favorite(self, template_id: str) -> bool:
        return template_id in self._favorite_ids

    # ------------------------------------------------------------------ Last used style

    def save_last_used_style(self, style: BannerStyle) -> bool:
        return self._write(LAST_USED_STYLE_KEY, style.without_text().to_dict())

    def load_last_used_style(self) -> BannerStyle | None:
        try:
            raw = self._store.get(LAST_USED_STYLE_KEY)
            if raw is None:
                return None
            return BannerStyle.from_dict(json.loads(raw)).without_text()
        except (KeyValueStoreError, *_DECODE_ERRORS) as e:
            logger.warning("Failed to load last used style: %s", e)
            return None

    # ------------------------------------------------------------------ Background images

    def _setup_image_directory(self) -> None:
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create image directory %s: %s", self.images_dir, e)

    def resolve_image_path(self, path: str) -> Path | None:
        """Map a stored relative path to a file inside the images directory."""
        if not path:
            return None
        target = (self._data_dir / path).resolve()
        if not target.is_relative_to(self.images_dir.resolve()):
            logger.warning("Rejected image path outside %s: %s", self.images_dir, path)
            return None
        return target

    def save_background_image(self, raw: bytes) -> str | None:
        """Encode *raw* to JPEG and store it. Returns the relative path or None."""
        try:
            data = self._codec.encode(raw)
        except ImageCodecError as e:
            logger.warning("Failed to encode background image: %s", e)
            return None

        file_name = f"{BACKGROUND_IMAGE_PREFIX}{uuid.uuid4().hex}{BACKGROUND_IMAGE_SUFFIX}"
        rel_path = f"{BACKGROUND_IMAGES_FOLDER}/{file_name}"
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            (self.images_dir / file_name).write_bytes(data)
        except OSError as e:
            logger.error("Failed to write background image %s: %s", rel_path, e)
            return None
        logger.info("Saved background image %s (%d bytes)", rel_path, len(data))
        return rel_path

    def delete_background_image(self, path: str) -> bool:
        target = self.resolve_image_path(path)
        if target is None:
            return False
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to delete background image %s: %s", path, e)
            return False
        return True

    def clear_all_background_images(self) -> int:
        """Delete every file in the images directory. Returns how many were removed."""
        if not self.images_dir.is_dir():
            return 0
        removed = 0
        for file in self.images_dir.iterdir():
            if not file.is_file():
                continue
            try:
                file.unlink()
                removed += 1
            except OSError as e:
                logger.error("Failed to delete %s: %s", file, e)
        return removed

    def list_background_images(self) -> list[str]:
        if not self.images_dir.is_dir():
            return []
        return sorted(
            f"{BACKGROUND_IMAGES_FOLDER}/{f.name}"
            for f in self.images_dir.iterdir() if f.is_file()
        )

    def background_image_exists(self, path: str) -> bool:
        target = self.resolve_image_path(path)
        return target is not None and target.is_file()

    def background_image_size(self, path: str) -> int | None:
        target = self.resolve_image_path(path)
        if target is None:
            return None
        try:
            return target.stat().st_size
        except OSError:
            return None

    # ------------------------------------------------------------------ Bulk

    def usage_statistics(self) -> UsageStatistics:
        return UsageStatistics(
            history_count=len(self._history),
            custom_template_count=len(self._custom_templates),
            favorite_count=len(self._favorite_ids),
        )

    def export_user_data(self) -> str | None:
        """Return history, custom templates and favorites as pretty JSON."""
        data = {
            "history": [h.to_dict() for h in self._history],
            "custom_templates": [t.to_dict() for t in self._custom_templates],
            "favorite_ids": sorted(self._favorite_ids),
        }
        try:
            return json.dumps(data, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            logger.error("Failed to export user data: %s", e)
            return None

    def reset_all_data(self) -> None:
        """Clear every collection, its stored blob and all background images.

        Each step runs even if an earlier one failed.
        """
        self._history.clear()
        self._custom_templates.clear()
        self._favorite_ids.clear()

        for key in (HISTORY_LIST_KEY, CUSTOM_TEMPLATES_KEY, FAVORITE_TEMPLATE_IDS_KEY):
            try:
                self._store.remove(key)
            except KeyValueStoreError as e:
                logger.error("Failed to remove %s: %s", key, e)

        try:
            self.clear_all_background_images()
        except OSError as e:
            logger.error("Failed to clear background images: %s", e)

        logger.info("All user data reset")
        self.history_changed.emit()
        self.templates_changed.emit()
        self.favorites_changed.emit()

"""Tests for BannerDataManager."""

import io
import json

import pytest
from PIL import Image
from PySide6.QtCore import QSettings

from ibanner.infrastructure.image_codec import QtImageCodec
from ibanner.infrastructure.kv_store import (
    KeyValueStore,
    KeyValueStoreError,
    QSettingsKeyValueStore,
)
from ibanner.models.banner_style import AnimationType, BannerStyle
from ibanner.models.banner_template import TemplateCategory, builtin_templates
from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.utils.config import (
    CUSTOM_TEMPLATES_KEY,
    FAVORITE_TEMPLATE_IDS_KEY,
    HISTORY_LIST_KEY,
)

from conftest import MemoryKeyValueStore


class _FailingStore(MemoryKeyValueStore):
    """Reads work, every write fails."""

    def set(self, key: str, value: str) -> None:
        raise KeyValueStoreError("disk full")

    def remove(self, key: str) -> None:
        raise KeyValueStoreError("disk full")


def test_stores_match_protocol(store):
    assert isinstance(store, KeyValueStore)
    assert isinstance(_FailingStore(), KeyValueStore)


def _png_bytes(mode: str = "RGBA") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, (32, 16), (255, 0, 0, 128) if mode == "RGBA" else (0, 0, 255)).save(
        buf, format="PNG"
    )
    return buf.getvalue()


# ------------------------------------------------------------------ History


class TestHistory:
    def test_same_text_refreshes_timestamp(self, data_manager, clock):
        data_manager.add_history(BannerStyle(text="Hello"))
        t1 = clock.advance(5)
        data_manager.add_history(BannerStyle(text="Hello"))

        history = data_manager.history
        assert len(history) == 1
        assert history[0].timestamp == t1

    def test_capped_at_max_count(self, data_manager, clock):
        for i in range(11):
            clock.advance()
            data_manager.add_history(BannerStyle(text=f"entry {i}"))

        texts = [h.text for h in data_manager.history]
        assert len(texts) == 10
        assert "entry 0" not in texts
        assert texts[0] == "entry 10"

    def test_sorted_newest_first(self, data_manager, clock):
        for text in ("a", "b", "c"):
            clock.advance()
            data_manager.add_history(BannerStyle(text=text))
        clock.advance()
        data_manager.add_history(BannerStyle(text="a"))

        assert [h.text for h in data_manager.history] == ["a", "c", "b"]

    def test_history_keeps_style_snapshot(self, data_manager):
        style = BannerStyle(text="snap", animation_type=AnimationType.BLINK)
        data_manager.add_history(style)
        style.animation_type = AnimationType.SCROLL
        assert data_manager.history[0].style.animation_type is AnimationType.BLINK

    def test_delete(self, data_manager):
        entry = data_manager.add_history(BannerStyle(text="x"))
        assert data_manager.delete_history(entry.history_id) is True
        assert data_manager.history == []
        assert data_manager.delete_history(entry.history_id) is False

    def test_clear_all(self, data_manager, store):
        data_manager.add_history(BannerStyle(text="x"))
        data_manager.clear_all_history()
        assert data_manager.history == []
        assert json.loads(store.get(HISTORY_LIST_KEY)) == []

    def test_search(self, data_manager, clock):
        for text in ("Happy Birthday", "Thank you", "happy hour"):
            clock.advance()
            data_manager.add_history(BannerStyle(text=text))
        assert [h.text for h in data_manager.search_history("HAPPY")] == [
            "happy hour", "Happy Birthday",
        ]
        assert len(data_manager.search_history("")) == 3

    def test_persisted_and_reloaded(self, data_manager, store, clock, tmp_path):
        data_manager.add_history(BannerStyle(text="persist me"))
        reloaded = BannerDataManager(store, data_dir=tmp_path / "data", clock=clock)
        assert [h.text for h in reloaded.history] == ["persist me"]

    def test_lowering_max_count_truncates(self, data_manager, clock):
        for i in range(5):
            clock.advance()
            data_manager.add_history(BannerStyle(text=str(i)))
        data_manager.max_history_count = 2
        assert [h.text for h in data_manager.history] == ["4", "3"]

    def test_signal_emitted(self, data_manager):
        calls = []
        data_manager.history_changed.connect(lambda: calls.append(1))
        data_manager.add_history(BannerStyle(text="x"))
        assert calls == [1]


# ------------------------------------------------------------------ Templates


class TestCustomTemplates:
    def test_add(self, data_manager, store):
        template = data_manager.add_custom_template(
            "Mine", BannerStyle(text="Go team"), TemplateCategory.SUPPORT
        )
        assert template.is_built_in is False
        assert template.text == "Go team"
        assert data_manager.custom_templates == [template]
        stored = json.loads(store.get(CUSTOM_TEMPLATES_KEY))
        assert stored[0]["template_id"] == template.template_id

    def test_all_category_stored_as_custom(self, data_manager):
        template = data_manager.add_custom_template(
            "x", BannerStyle(text="x"), TemplateCategory.ALL
        )
        assert template.category is TemplateCategory.CUSTOM

    def test_delete_removes_favorite(self, data_manager, store):
        template = data_manager.add_custom_template("x", BannerStyle(text="x"))
        data_manager.toggle_favorite(template.template_id)
        assert data_manager.delete_custom_template(template.template_id) is True
        assert data_manager.custom_templates == []
        assert not data_manager.is_favorite(template.template_id)
        assert json.loads(store.get(FAVORITE_TEMPLATE_IDS_KEY)) == []

    def test_delete_builtin_is_rejected(self, data_manager):
        builtin = data_manager.builtin_templates[0]
        assert data_manager.delete_custom_template(builtin.template_id) is False
        assert data_manager.get_template(builtin.template_id) is not None

    def test_delete_unknown(self, data_manager):
        assert data_manager.delete_custom_template("nope") is False


class TestFavorites:
    def test_toggle_twice_restores_state(self, data_manager):
        template_id = data_manager.builtin_templates[2].template_id
        before = data_manager.favorite_ids
        assert data_manager.toggle_favorite(template_id) is True
        assert data_manager.toggle_favorite(template_id) is False
        assert data_manager.favorite_ids == before

    def test_unknown_id_rejected(self, data_manager):
        assert data_manager.toggle_favorite("missing") is False
        assert data_manager.favorite_ids == frozenset()

    def test_stale_ids_pruned_on_load(self, tmp_path, clock):
        known = builtin_templates()[0].template_id
        store = MemoryKeyValueStore({
            FAVORITE_TEMPLATE_IDS_KEY: json.dumps([known, "deleted-template"]),
        })
        manager = BannerDataManager(store, data_dir=tmp_path, clock=clock)
        assert manager.favorite_ids == frozenset({known})
        assert json.loads(store.get(FAVORITE_TEMPLATE_IDS_KEY)) == [known]


# ------------------------------------------------------------------ Failure handling


class TestFailures:
    def test_corrupt_blob_loads_empty_others_survive(self, tmp_path, clock):
        source = BannerDataManager(MemoryKeyValueStore(), data_dir=tmp_path, clock=clock)
        template = source.add_custom_template("keep", BannerStyle(text="keep"))

        store = MemoryKeyValueStore({
            HISTORY_LIST_KEY: "{not json",
            CUSTOM_TEMPLATES_KEY: json.dumps([template.to_dict()]),
        })
        manager = BannerDataManager(store, data_dir=tmp_path, clock=clock)
        assert manager.history == []
        assert [t.name for t in manager.custom_templates] == ["keep"]

    def test_wrong_json_type_loads_empty(self, tmp_path, clock):
        store = MemoryKeyValueStore({HISTORY_LIST_KEY: json.dumps({"a": 1})})
        manager = BannerDataManager(store, data_dir=tmp_path, clock=clock)
        assert manager.history == []

    def test_write_failure_keeps_memory_state(self, tmp_path, clock):
        manager = BannerDataManager(_FailingStore(), data_dir=tmp_path, clock=clock)
        manager.add_history(BannerStyle(text="still here"))
        template = manager.add_custom_template("t", BannerStyle(text="t"))
        assert [h.text for h in manager.history] == ["still here"]
        assert manager.toggle_favorite(template.template_id) is True

    def test_reset_continues_after_store_errors(self, tmp_path, clock):
        manager = BannerDataManager(_FailingStore(), data_dir=tmp_path, clock=clock)
        manager.add_history(BannerStyle(text="x"))
        path = manager.save_background_image(_png_bytes())
        manager.reset_all_data()
        assert manager.history == []
        assert not manager.background_image_exists(path)


# ------------------------------------------------------------------ Last used style


class TestLastUsedStyle:
    def test_round_trip_without_text(self, data_manager):
        assert data_manager.load_last_used_style() is None
        data_manager.save_last_used_style(
            BannerStyle(text="secret", animation_type=AnimationType.GRADIENT, font_size=70)
        )
        style = data_manager.load_last_used_style()
        assert style.text == ""
        assert style.animation_type is AnimationType.GRADIENT
        assert style.font_size == 70

    def test_corrupt_value(self, store, tmp_path, clock):
        store.set("LastUsedStyle", "][")
        manager = BannerDataManager(store, data_dir=tmp_path, clock=clock)
        assert manager.load_last_used_style() is None


# ------------------------------------------------------------------ Background images


class TestBackgroundImages:
    def test_save_creates_jpeg(self, data_manager):
        path = data_manager.save_background_image(_png_bytes())
        assert path.startswith("BackgroundImages/bg_")
        assert path.endswith(".jpg")
        assert data_manager.background_image_exists(path)
        with Image.open(data_manager.resolve_image_path(path)) as img:
            assert img.format == "JPEG"
            assert img.size == (32, 16)
        assert data_manager.background_image_size(path) > 0

    def test_invalid_bytes_rejected(self, data_manager):
        assert data_manager.save_background_image(b"not an image") is None
        assert data_manager.list_background_images() == []

    def test_delete(self, data_manager):
        path = data_manager.save_background_image(_png_bytes("RGB"))
        assert data_manager.delete_background_image(path) is True
        assert not data_manager.background_image_exists(path)

    def test_path_outside_images_dir_rejected(self, data_manager):
        assert data_manager.resolve_image_path("../outside.jpg") is None
        assert data_manager.delete_background_image("../../etc/passwd") is False
        assert data_manager.background_image_size("../x.jpg") is None

    def test_clear_all(self, data_manager):
        for _ in range(3):
            data_manager.save_background_image(_png_bytes())
        assert len(data_manager.list_background_images()) == 3
        assert data_manager.clear_all_background_images() == 3
        assert data_manager.list_background_images() == []

    def test_qt_codec(self, qapp, store, clock, tmp_path):
        manager = BannerDataManager(
            store, data_dir=tmp_path, codec=QtImageCodec(), clock=clock
        )
        path = manager.save_background_image(_png_bytes())
        assert path is not None
        assert manager.background_image_exists(path)


# ------------------------------------------------------------------ Bulk


class TestBulk:
    def test_usage_statistics(self, data_manager):
        data_manager.add_history(BannerStyle(text="a"))
        template = data_manager.add_custom_template("t", BannerStyle(text="t"))
        data_manager.toggle_favorite(template.template_id)
        stats = data_manager.usage_statistics()
        assert (stats.history_count, stats.custom_template_count, stats.favorite_count) == (1, 1, 1)

    def test_export(self, data_manager):
        data_manager.add_history(BannerStyle(text="exported"))
        payload = json.loads(data_manager.export_user_data())
        assert set(payload) == {"history", "custom_templates", "favorite_ids"}
        assert payload["history"][0]["text"] == "exported"

    def test_reset_all(self, data_manager, store):
        data_manager.add_history(BannerStyle(text="a"))
        template = data_manager.add_custom_template("t", BannerStyle(text="t"))
        data_manager.toggle_favorite(template.template_id)
        data_manager.save_background_image(_png_bytes())

        data_manager.reset_all_data()

        assert data_manager.history == []
        assert data_manager.custom_templates == []
        assert data_manager.favorite_ids == frozenset()
        assert data_manager.list_background_images() == []
        assert store.get(HISTORY_LIST_KEY) is None
        assert len(data_manager.builtin_templates) == 8


class TestQSettingsStore:
    @pytest.fixture
    def settings(self, qapp, tmp_path):
        return QSettings(str(tmp_path / "store.ini"), QSettings.Format.IniFormat)

    def test_round_trip(self, settings):
        store = QSettingsKeyValueStore(settings)
        store.set("k", '["é"]')
        assert store.get("k") == '["é"]'
        store.remove("k")
        assert store.get("k") is None

    def test_manager_on_qsettings(self, settings, tmp_path, clock):
        manager = BannerDataManager(
            QSettingsKeyValueStore(settings), data_dir=tmp_path / "d", clock=clock
        )
        manager.add_history(BannerStyle(text="from ini"))
        reloaded = BannerDataManager(
            QSettingsKeyValueStore(settings), data_dir=tmp_path / "d", clock=clock
        )
        assert [h.text for h in reloaded.history] == ["from ini"]

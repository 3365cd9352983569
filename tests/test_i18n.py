"""Tests for i18n (internationalization) module."""

from ibanner.models.banner_style import AnimationType
from ibanner.models.banner_template import TemplateCategory
from ibanner.utils.i18n import SUPPORTED_LANGUAGES, current_language, init_language, tr


class TestI18n:
    """Test the tr() translation function."""

    def test_tr_returns_key_for_english(self):
        init_language("en")
        assert tr("&File") == "&File"
        assert tr("Show Banner") == "Show Banner"

    def test_tr_returns_chinese(self):
        init_language("zh")
        assert tr("&File") == "文件(&F)"
        assert tr("Show Banner") == "开始展示"

    def test_tr_fallback_for_missing_key(self):
        init_language("zh")
        assert tr("nonexistent_key_xyz_12345") == "nonexistent_key_xyz_12345"

    def test_unknown_language_falls_back(self):
        init_language("xx")
        assert tr("&File") == "&File"

    def test_current_language(self):
        init_language("en")
        assert current_language() == "en"
        init_language("zh")
        assert current_language() == "zh"

    def test_enum_display_names_translated(self):
        init_language("zh")
        assert AnimationType.TYPEWRITER.display_name == "逐字显示"
        assert TemplateCategory.PARTY.display_name == "聚会"

    def test_supported_languages(self):
        assert set(SUPPORTED_LANGUAGES) == {"en", "zh"}

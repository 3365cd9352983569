"""Tests for TemplateCatalog queries."""

import pytest

from ibanner.models.banner_style import BannerStyle
from ibanner.models.banner_template import TemplateCategory
from ibanner.services.template_catalog import TemplateCatalog


@pytest.fixture
def catalog(data_manager):
    return TemplateCatalog(data_manager)


def test_get_all_builtins_first(catalog, data_manager):
    custom = data_manager.add_custom_template("Mine", BannerStyle(text="Mine"))
    templates = catalog.get_all()
    assert len(templates) == 9
    assert templates[:8] == data_manager.builtin_templates
    assert templates[-1].template_id == custom.template_id


def test_get(catalog, data_manager):
    builtin = data_manager.builtin_templates[3]
    assert catalog.get(builtin.template_id) is builtin
    assert catalog.get("missing") is None


def test_empty_search_returns_all(catalog):
    assert catalog.search("") == catalog.get_all()


def test_search_is_case_insensitive(catalog):
    names = [t.name for t in catalog.search("BIRTHDAY")]
    assert names == ["Happy Birthday"]


def test_search_matches_text(catalog):
    assert [t.name for t in catalog.search("go go")] == ["Fan Support"]


def test_search_matches_category_name(catalog):
    names = {t.name for t in catalog.search("transport")}
    assert names == {"Airport Pickup", "Designated Driver"}


def test_by_category(catalog):
    support = catalog.get_by_category(TemplateCategory.SUPPORT)
    assert [t.name for t in support] == ["Concert Cheer", "Fan Support"]
    assert catalog.get_by_category(TemplateCategory.ALL) == catalog.get_all()
    assert catalog.get_by_category(TemplateCategory.CUSTOM) == []


def test_favorites(catalog, data_manager):
    target = data_manager.builtin_templates[5]
    assert catalog.get_favorites() == []
    data_manager.toggle_favorite(target.template_id)
    assert catalog.get_favorites() == [target]


def test_query_combines_filters(catalog, data_manager):
    for template in data_manager.builtin_templates:
        if template.category is TemplateCategory.COMMUNICATION:
            data_manager.toggle_favorite(template.template_id)
    data_manager.toggle_favorite(data_manager.builtin_templates[0].template_id)

    result = catalog.query(TemplateCategory.COMMUNICATION, "wait", favorites_only=True)
    assert [t.name for t in result] == ["Please Wait"]
    assert len(catalog.query(favorites_only=True)) == 3

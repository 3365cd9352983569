"""Template catalog - read-only queries over built-in and custom templates."""

from __future__ import annotations

from ibanner.models.banner_template import BannerTemplate, TemplateCategory
from ibanner.services.banner_data_manager import BannerDataManager


class TemplateCatalog:
    """Query surface used by the templates panel."""

    def __init__(self, data_manager: BannerDataManager):
        self._data = data_manager

    def get_all(self) -> list[BannerTemplate]:
        """Built-in templates first (fixed order), then custom ones."""
        return self._data.builtin_templates + self._data.custom_templates

    def get(self, template_id: str) -> BannerTemplate | None:
        return self._data.get_template(template_id)

    def get_by_category(self, category: TemplateCategory) -> list[BannerTemplate]:
        items = self.get_all()
        if category is TemplateCategory.ALL:
            return items
        return [t for t in items if t.category is category]

    def get_favorites(self) -> list[BannerTemplate]:
        favorites = self._data.favorite_ids
        return [t for t in self.get_all() if t.template_id in favorites]

    def search(self, keyword: str) -> list[BannerTemplate]:
        """Case-insensitive match on name, text or category display name."""
        return self._filter(self.get_all(), keyword)

    def query(
        self,
        category: TemplateCategory = TemplateCategory.ALL,
        keyword: str = "",
        favorites_only: bool = False,
    ) -> list[BannerTemplate]:
        items = self.get_by_category(category)
        if favorites_only:
            favorites = self._data.favorite_ids
            items = [t for t in items if t.template_id in favorites]
        return self._filter(items, keyword)

    @staticmethod
    def _filter(items: list[BannerTemplate], keyword: str) -> list[BannerTemplate]:
        if not keyword:
            return items
        needle = keyword.casefold()
        return [
            t for t in items
            if needle in t.name.casefold()
            or needle in t.style.text.casefold()
            or needle in t.category.display_name.casefold()
        ]

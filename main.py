"""iBanner application entry point."""

import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QColor, QPalette

from ibanner.infrastructure import QSettingsKeyValueStore
from ibanner.services.app_logger import setup_logging
from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.services.settings_manager import SettingsManager
from ibanner.services.subscription_manager import SubscriptionManager
from ibanner.services.template_catalog import TemplateCatalog
from ibanner.ui.main_window import MainWindow
from ibanner.utils.config import APP_NAME, APP_VERSION, ORG_NAME
from ibanner.utils.i18n import init_language

logger = logging.getLogger("ibanner")


def _apply_dark_theme(app: QApplication) -> None:
    """Apply a dark color palette using the Fusion style."""
    app.setStyle("Fusion")
    palette = QPalette()

    # Base colors
    palette.setColor(QPalette.ColorRole.Window, QColor(45, 45, 45))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(212, 212, 212))
    palette.setColor(QPalette.ColorRole.Base, QColor(30, 30, 30))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(45, 45, 45))
    palette.setColor(QPalette.ColorRole.ToolTipBase, QColor(50, 50, 50))
    palette.setColor(QPalette.ColorRole.ToolTipText, QColor(212, 212, 212))
    palette.setColor(QPalette.ColorRole.Text, QColor(212, 212, 212))
    palette.setColor(QPalette.ColorRole.Button, QColor(55, 55, 55))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(212, 212, 212))
    palette.setColor(QPalette.ColorRole.BrightText, QColor(255, 255, 255))

    # Highlight
    palette.setColor(QPalette.ColorRole.Highlight, QColor(0, 188, 212))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))

    # Disabled
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.WindowText, QColor(120, 120, 120))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, QColor(120, 120, 120))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.ButtonText, QColor(120, 120, 120))

    app.setPalette(palette)


def main() -> None:
    setup_logging()

    QApplication.setOrganizationName(ORG_NAME)
    QApplication.setApplicationName(APP_NAME)
    QApplication.setApplicationVersion(APP_VERSION)

    app = QApplication(sys.argv)
    _apply_dark_theme(app)

    # Initialize UI language from settings
    settings = SettingsManager()
    init_language(settings.get_ui_language())

    data_manager = BannerDataManager(
        QSettingsKeyValueStore(),
        max_history_count=settings.get_max_history_count(),
    )
    catalog = TemplateCatalog(data_manager)
    subscription = SubscriptionManager(
        gating_enabled=settings.get_premium_gating_enabled(),
    )
    logger.info("%s %s started", APP_NAME, APP_VERSION)

    window = MainWindow(data_manager, catalog, subscription, settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

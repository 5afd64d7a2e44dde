import logging
import sys

from PySide6.QtWidgets import QApplication

from config import Settings, get_settings
from core.app_context import build_context
from ui.main_window import MainWindow
from utils.logging_config import setup_logging

__all__ = ["main"]


def main(settings: Settings | None = None) -> int:
    """Запускает настольное приложение для работы с клиентами."""

    settings = settings or get_settings()
    if not settings.is_supabase_configured:
        raise RuntimeError("SUPABASE_URL и SUPABASE_ANON_KEY не заданы в .env")

    setup_logging(settings)
    logger = logging.getLogger(__name__)
    logger.info("🚀 Запуск, таблица клиентов: %s", settings.clients_table)

    # ───── GUI ─────
    app = QApplication.instance() or QApplication(sys.argv)

    context = build_context(settings)

    window = MainWindow(context=context)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

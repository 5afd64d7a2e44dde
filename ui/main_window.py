import base64
import logging

from PySide6.QtCore import QByteArray, Qt
from PySide6.QtWidgets import QMainWindow, QStackedWidget, QStatusBar

from core.app_context import AppContext, get_app_context
from services.auth.auth_controller import AuthController
from services.auth.session_gate import SessionGate
from services.clients.dashboard_controller import DashboardController, Notification
from ui import settings as ui_settings
from ui.common.message_boxes import show_error
from ui.views.dashboard_view import DashboardView
from ui.views.login_view import LoginView
from utils.screen_utils import get_scaled_size

logger = logging.getLogger(__name__)

WINDOW_SETTINGS_KEY = "MainWindow"
STATUS_TIMEOUT_MS = 5000


def apply_main_window_settings(
    settings: dict,
    restore_geometry,
    window_state_getter,
    set_window_state,
    *,
    logger_: logging.Logger | None = None,
):
    logger_ = logger_ or logger
    geom = settings.get("geometry")
    if geom:
        try:
            restored = restore_geometry(QByteArray(base64.b64decode(geom)))
        except (ValueError, TypeError):
            restored = False
        if not restored:
            logger_.warning("Не удалось восстановить геометрию окна")
    if "open_maximized" in settings:
        current_state = window_state_getter()
        if settings.get("open_maximized"):
            set_window_state(current_state | Qt.WindowMaximized)
        else:
            set_window_state(current_state & ~Qt.WindowMaximized)


def _session_email(session) -> str | None:
    user = getattr(session, "user", None)
    return getattr(user, "email", None)


class MainWindow(QMainWindow):
    """Главное окно: экран входа либо дашборд клиентов."""

    def __init__(
        self,
        *,
        context: AppContext | None = None,
        settings_applier=apply_main_window_settings,
    ):
        super().__init__()
        self._context = context or get_app_context()
        self._settings_applier = settings_applier
        self.setWindowTitle("CRM · Клиенты")
        self.resize(get_scaled_size(1200, 800, ratio=0.8))
        self.setMinimumSize(480, 560)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        runner = self._context.task_runner
        provider = self._context.session_provider
        self.auth_controller = AuthController(provider, runner, parent=self)
        self.dashboard_controller = DashboardController(
            self._context.client_repository, provider, runner, parent=self
        )
        self.gate = SessionGate(provider, parent=self)

        self.stack = QStackedWidget(self)
        self.setCentralWidget(self.stack)
        self.login_view = LoginView(self.auth_controller, parent=self)
        self.dashboard_view = DashboardView(self.dashboard_controller, parent=self)
        self.stack.addWidget(self.login_view)
        self.stack.addWidget(self.dashboard_view)
        self.stack.setCurrentWidget(self.login_view)

        self.auth_controller.signed_in.connect(self.show_dashboard)
        self.gate.authenticated.connect(self.show_dashboard)
        self.gate.unauthenticated.connect(self.show_login)
        self.dashboard_controller.logged_out.connect(self.show_login)
        self.dashboard_controller.notified.connect(self.on_notification)
        self.dashboard_view.data_loaded.connect(self.show_count)

        self._load_settings()
        self.gate.start()

    def _load_settings(self):
        st = ui_settings.get_window_settings(WINDOW_SETTINGS_KEY)
        self._settings_applier(
            st,
            self.restoreGeometry,
            self.windowState,
            self.setWindowState,
        )

    @property
    def on_dashboard(self) -> bool:
        return self.stack.currentWidget() is self.dashboard_view

    def show_dashboard(self, session=None):
        # вход и подписка на сессию могут сообщить об одном и том же
        if self.on_dashboard:
            return
        logger.info("🔓 Переход к списку клиентов")
        self.dashboard_view.set_user(_session_email(session))
        self.dashboard_controller.activate()
        self.stack.setCurrentWidget(self.dashboard_view)
        self.dashboard_controller.load_clients()

    def show_login(self):
        if not self.on_dashboard:
            return
        logger.info("🔒 Сессия завершена, показываем экран входа")
        self.stack.setCurrentWidget(self.login_view)
        self.dashboard_controller.reset()
        self.login_view.reset()

    def on_notification(self, note: Notification):
        if note.level == "error":
            show_error(note.message, title=note.title, parent=self)
        else:
            self.status_bar.showMessage(f"{note.title}: {note.message}", STATUS_TIMEOUT_MS)

    def show_count(self, count: int):
        if self.on_dashboard:
            self.status_bar.showMessage(f"Клиентов: {count}")

    def closeEvent(self, event):
        st = ui_settings.get_window_settings(WINDOW_SETTINGS_KEY)
        st.update(
            {
                "geometry": base64.b64encode(bytes(self.saveGeometry())).decode("ascii"),
                "open_maximized": self.isMaximized(),
            }
        )
        ui_settings.set_window_settings(WINDOW_SETTINGS_KEY, st)
        self.gate.stop()
        wait_all = getattr(self._context.task_runner, "wait_all", None)
        if wait_all is not None:
            wait_all()
        super().closeEvent(event)


__all__ = ["MainWindow", "apply_main_window_settings"]

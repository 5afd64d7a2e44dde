import pytest
from PySide6.QtCore import Qt

from services.clients.dashboard_state import ListStatus
from ui.views.dashboard_view import DashboardView


@pytest.fixture
def view(qtbot, dashboard_controller):
    view = DashboardView(dashboard_controller)
    qtbot.addWidget(view)
    dashboard_controller.load_clients()
    return view


def test_renders_cards_and_counters(view):
    assert len(view.grid.cards) == 3
    assert view.empty_widget.isHidden()
    assert view.status_label.isHidden()
    assert (view.total_card.value, view.active_card.value, view.new_card.value) == (3, 1, 0)


def test_search_filters_cards_but_not_counters(view):
    view.search_box.set_text("sarah")
    assert [card.client.id for card in view.grid.cards] == ["2"]
    assert view.total_card.value == 3
    assert view.search_box.count_label.text() == "Найдено: 1 из 3"

    view.search_box.set_text("")
    assert view.search_box.count_label.isHidden()


def test_empty_search_result_shows_hint(view):
    view.search_box.set_text("zzz")
    assert view.grid.cards == []
    assert not view.empty_widget.isHidden()
    assert view.empty_title.text() == "<h3>Клиенты не найдены</h3>"
    assert view.empty_hint.text() == "Попробуйте изменить условия поиска"


def test_empty_list_invites_to_add(qtbot, repository, session_provider, sync_runner, fake_supabase):
    from services.clients.dashboard_controller import DashboardController

    fake_supabase.tables["clients"] = []
    controller = DashboardController(repository, session_provider, sync_runner)
    view = DashboardView(controller)
    qtbot.addWidget(view)
    controller.load_clients()
    assert not view.empty_widget.isHidden()
    assert view.empty_hint.text() == "Начните с добавления первого клиента"


def test_load_error_is_shown(view, fake_supabase, dashboard_controller):
    fake_supabase.fail("select")
    view.refresh()
    assert dashboard_controller.status is ListStatus.ERROR
    assert not view.status_label.isHidden()
    assert "Не удалось загрузить клиентов" in view.status_label.text()
    assert len(view.grid.cards) == 3


def test_delete_from_card(view, dashboard_controller, monkeypatch):
    monkeypatch.setattr("ui.widgets.client_card.confirm_delete", lambda *a, **k: True)
    view.grid.cards[1].delete_btn.click()
    assert [c.id for c in dashboard_controller.clients] == ["1", "3"]
    assert len(view.grid.cards) == 2
    assert view.total_card.value == 2


def test_add_button_opens_form(view, dashboard_controller):
    view.add_btn.click()
    assert view.form is not None
    assert dashboard_controller.dialog.is_open

    view.form.reject()
    assert view.form is None
    assert not dashboard_controller.dialog.is_open


def test_edit_button_opens_prefilled_form(view):
    view.grid.cards[0].edit_btn.click()
    assert view.form is not None
    assert view.form.fields["name"].text() == "John Smith"
    view.form.reject()


def test_export_uses_visible_clients(view, tmp_path):
    view.search_box.set_text("acme")
    path = tmp_path / "clients.csv"
    assert view.export_csv(str(path)) == 1
    assert "John Smith" in path.read_text(encoding="utf-8-sig")


def test_data_loaded_reports_visible_count(view):
    counts = []
    view.data_loaded.connect(counts.append)
    view.search_box.set_text("o")
    view.search_box.set_text("sarah")
    assert counts == [3, 1]


def test_escape_clears_search(qtbot, view):
    view.search_box.set_text("sarah")
    assert len(view.grid.cards) == 1

    qtbot.keyClick(view.search_box, Qt.Key_Escape)
    assert view.search_box.get_text() == ""
    assert len(view.grid.cards) == 3

import dash

import dash_app
from irt_explorer.controller import SliderInput


def _session(session_id):
    return dash_app._SESSIONS.get(session_id), {"session_id": session_id}


def test_refresh_tick_only_flushes_its_own_session():
    first, first_data = _session("tick-first")
    second, second_data = _session("tick-second")
    first.controller.dispatch(SliderInput("a", 2.5))

    response = dash_app._handle_refresh_tick(1, second_data)
    assert response[0] is dash.no_update
    assert response[-1] is True
    assert first.pending is True

    response = dash_app._handle_refresh_tick(1, first_data)
    assert response[0] is first.figure()
    assert response[2] == "2.5"
    assert response[-1] is True
    assert second.label_texts()[0] == "1.0"


def test_refresh_tick_stays_enabled_while_render_pending():
    session, data = _session("tick-pending")
    session.controller.dispatch(SliderInput("b", 1.0))
    assert session.controller.tick() is True

    # a second change inside the same quantum has to wait for a later tick
    session.controller.coalescer._last_flush = float("inf")
    session.controller.dispatch(SliderInput("b", 2.0))
    response = dash_app._handle_refresh_tick(1, data)
    assert response[0] is dash.no_update
    assert response[-1] is False


def test_information_toggle_disables_refresh_tick():
    session, data = _session("toggle")
    response = dash_app._handle_information_toggle([], data)
    assert session.controller.store.get().show_information is False
    assert response[0] is session.figure()
    assert response[-1] is True


def test_download_uses_session_activity_only():
    first, first_data = _session("csv-first")
    _, second_data = _session("csv-second")
    first.controller.dispatch(SliderInput("c", 0.2))

    assert dash_app._handle_download_csv(1, second_data) is dash.no_update
    download = dash_app._handle_download_csv(1, first_data)
    assert download["filename"] == "irt_activity_csv-first.csv"
    assert "param_change" in download["content"]

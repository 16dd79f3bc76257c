from concurrent.futures import ThreadPoolExecutor

import pytest
from singlish import translate
from singlish.engine import Engine
from frontend.web import app as flask_app
import frontend.web as webmod


@pytest.fixture
def client():
    eng = Engine().build()
    webmod._engine = eng
    webmod._sessions.clear()
    try:
        yield flask_app.test_client()
    finally:
        webmod._sessions.clear()
        webmod._engine = None
        eng.shutdown()


@pytest.mark.e2e
def test_frontend_health(client):
    rv = client.get("/api/health")
    assert rv.status_code == 200
    assert rv.get_json()["ok"] is True


@pytest.mark.e2e
def test_frontend_home_page_renders(client):
    rv = client.get("/")
    assert rv.status_code == 200
    html = rv.get_data(as_text=True)
    assert "<textarea" in html
    assert "Input your Singlish text here." in html


@pytest.mark.e2e
def test_frontend_translate_api_json(client):
    rv = client.get("/api/translate?q=mama%20paaree%20inne")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data == {"input": "mama paaree inne", "output": "මම පාරේ ඉන්නේ"}


@pytest.mark.e2e
def test_frontend_translate_empty_query(client):
    assert client.get("/api/translate").get_json()["output"] == ""


@pytest.mark.e2e
def test_frontend_session_lifecycle(client):
    rv = client.post("/api/session")
    assert rv.status_code == 201
    sid = rv.get_json()["id"]

    rv = client.post(f"/api/session/{sid}", json={"text": "mama kae"})
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["output"] == "මම කැ"
    assert data["stable_boundary"] == 5

    data = client.post(f"/api/session/{sid}", json={"text": "mama kaeema kannavaa"}).get_json()
    assert data["output"] == "මම කෑම කන්නවා"
    assert data["diagnostics"] == []

    assert client.delete(f"/api/session/{sid}").status_code == 200
    assert client.post(f"/api/session/{sid}", json={"text": "mama"}).status_code == 404


@pytest.mark.e2e
def test_frontend_session_bad_requests(client):
    assert client.post("/api/session/nope", json={"text": "mama"}).status_code == 404
    assert client.delete("/api/session/nope").status_code == 404

    sid = client.post("/api/session").get_json()["id"]
    assert client.post(f"/api/session/{sid}", json={"txt": "mama"}).status_code == 400
    assert client.post(f"/api/session/{sid}", data="mama").status_code == 400


@pytest.mark.e2e
def test_frontend_reports_missing_tables(tmp_path, monkeypatch):
    import singlish.config as CFG
    monkeypatch.setattr(CFG, "DATA_DIR", tmp_path / "missing")
    monkeypatch.setattr(webmod, "_engine", None)
    rv = flask_app.test_client().get("/api/translate?q=mama")
    assert rv.status_code == 500
    assert "rule table unavailable" in rv.get_json()["error"]


@pytest.mark.e2e
def test_frontend_sessions_are_capped_least_recently_used_first(client, monkeypatch):
    monkeypatch.setattr(webmod, "MAX_SESSIONS", 2)
    a = client.post("/api/session").get_json()["id"]
    b = client.post("/api/session").get_json()["id"]
    assert client.post(f"/api/session/{a}", json={"text": "mama"}).status_code == 200

    c = client.post("/api/session").get_json()["id"]
    assert client.get("/api/health").get_json()["sessions"] == 2
    assert client.post(f"/api/session/{b}", json={"text": "mama"}).status_code == 404
    assert client.post(f"/api/session/{a}", json={"text": "mama"}).status_code == 200
    assert client.post(f"/api/session/{c}", json={"text": "mama"}).status_code == 200


@pytest.mark.e2e
def test_frontend_idle_sessions_expire(client, monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr(webmod, "_now", lambda: clock[0])
    idle = client.post("/api/session").get_json()["id"]
    clock[0] += webmod.SESSION_IDLE_S + 1
    assert client.post(f"/api/session/{idle}", json={"text": "mama"}).status_code == 404

    fresh = client.post("/api/session").get_json()["id"]
    clock[0] += webmod.SESSION_IDLE_S - 1
    assert client.post(f"/api/session/{fresh}", json={"text": "mama"}).status_code == 200


@pytest.mark.e2e
def test_frontend_overlapping_updates_on_one_session(client):
    sid = client.post("/api/session").get_json()["id"]
    text = "oyaa monavadha karannee? ru. 5000k"
    prefixes = [text[:i] for i in range(1, len(text) + 1)] * 3

    def send(prefix):
        rv = flask_app.test_client().post(f"/api/session/{sid}", json={"text": prefix})
        return prefix, rv.status_code, rv.get_json()["output"]

    with ThreadPoolExecutor(max_workers=8) as pool:
        for prefix, status, output in pool.map(send, prefixes):
            assert status == 200
            assert output == translate(prefix)


@pytest.mark.e2e
def test_frontend_page_closes_session_and_labels_diagnostics(client):
    html = client.get("/").get_data(as_text=True)
    assert "pagehide" in html
    assert "keepalive" in html
    assert "Corrected:" in html

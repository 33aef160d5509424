from fastapi.testclient import TestClient

from sink.main import create_app


def test_post_valid_film(client, metrics, valid_film):
    before = metrics.value("sink_post_total", 201)

    resp = client.post("/films", json=valid_film)

    assert resp.status_code == 201
    assert resp.content == b""
    assert metrics.value("sink_post_total", 201) == before + 1


def test_post_film_from_before_cinema(client, metrics, valid_film):
    valid_film["year"] = 1700

    resp = client.post("/films", json=valid_film)

    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith("text/plain")
    assert "year must be between 1888 and" in resp.text
    assert metrics.value("sink_post_total", 400) == 1


def test_post_malformed_json(client, metrics):
    resp = client.post("/films", content=b'{"title": "Heat"', headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert resp.text
    assert metrics.value("sink_post_total", 400) == 1


def test_post_invalid_utf8_reports_the_field(client):
    body = b'{"title": "ab\xff", "year": 1994}'

    resp = client.post("/films", content=body)

    assert resp.status_code == 400
    assert resp.text.startswith("value for title contains an invalid character at position 2")


def test_post_simulated_failure(make_sink, metrics, valid_film):
    with TestClient(create_app(make_sink(draws=[0]))) as client:
        resp = client.post("/films", json=valid_film)

    assert resp.status_code == 503
    assert resp.content == b""
    assert metrics.value("sink_post_total", 503) == 1


def test_get_anything(client, metrics):
    resp = client.get("/anything", params={"name": "x"})

    assert resp.status_code == 200
    assert resp.json() == []
    assert metrics.value("sink_get_total", 200) == 1


def test_get_without_name(client):
    resp = client.get("/films")

    assert resp.status_code == 200
    assert resp.json() == []


def test_unsupported_method(client, metrics):
    resp = client.delete("/films")

    assert resp.status_code == 405
    assert resp.text == "unsupported method: DELETE"
    assert metrics.value("sink_get_total", 405) == 0


def test_put_is_unsupported(client):
    resp = client.put("/films", json={})

    assert resp.status_code == 405
    assert resp.text == "unsupported method: PUT"


def test_nested_path_is_not_found(client):
    assert client.get("/films/1").status_code == 404


def test_metrics_exposes_both_counters(client, valid_film):
    client.get("/films")
    client.post("/films", json=valid_film)
    client.post("/films", json={})

    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert 'sink_get_total{status="200"} 1.0' in resp.text
    assert 'sink_post_total{status="201"} 1.0' in resp.text
    assert 'sink_post_total{status="400"} 1.0' in resp.text


def test_metrics_is_not_counted_as_a_get(client, metrics):
    client.get("/metrics")

    assert metrics.value("sink_get_total", 200) == 0


def test_apps_do_not_share_counters():
    first = create_app()
    second = create_app()

    with TestClient(first) as client:
        for _ in range(3):
            client.get("/films")
    with TestClient(second) as client:
        text = client.get("/metrics").text

    assert 'sink_get_total{status="200"}' not in text


def test_trace_is_unsupported(client):
    resp = client.request("TRACE", "/films")

    assert resp.status_code == 405
    assert resp.text == "unsupported method: TRACE"
    assert resp.headers["content-type"].startswith("text/plain")


def test_unknown_method_is_unsupported(client):
    resp = client.request("PURGE", "/films")

    assert resp.status_code == 405
    assert resp.text == "unsupported method: PURGE"


def test_metrics_answers_any_method(client, metrics, valid_film):
    resp = client.post("/metrics", json=valid_film)

    assert resp.status_code == 200
    assert "sink_post_total" in resp.text
    assert metrics.value("sink_post_total", 201) == 0
    assert metrics.value("sink_post_total", 400) == 0


def test_post_keys_match_fields_ignoring_case(client, metrics, valid_film):
    body = {key.capitalize(): value for key, value in valid_film.items()}

    resp = client.post("/films", json=body)

    assert resp.status_code == 201
    assert metrics.value("sink_post_total", 201) == 1

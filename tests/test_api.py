import pytest
from fastapi.testclient import TestClient

from personapi.core.config import Settings
from personapi.main import create_app
from personapi.schemas.person import Person


@pytest.fixture(name="app")
def app_fixture():
    return create_app(
        settings=Settings(GREETING_TEXT="Hello there"),
        seed=[Person(id=1, name="Alice")],
    )


@pytest.fixture(name="client")
def client_fixture(app):
    with TestClient(app) as client:
        yield client


def test_end_to_end_flow(client):
    response = client.get("/api/persons")
    assert response.status_code == 200
    assert response.json() == [{"id": 1, "name": "Alice"}]

    response = client.get("/api/person/1")
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Alice"}

    assert client.get("/api/person/2").status_code == 404

    response = client.post("/api/person", json={"name": "Bob"})
    assert response.status_code == 201
    assert response.json() == {"id": 2, "name": "Bob"}
    assert len(client.get("/api/persons").json()) == 2

    response = client.delete("/api/person/1")
    assert response.status_code == 200
    assert client.get("/api/person/1").status_code == 404


def test_landing_page_uses_greeting(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Hello there" in response.text
    assert "Current UTC time" in response.text


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.text == "OK"


def test_not_found_body(client):
    response = client.get("/api/person/99")
    assert response.status_code == 404
    assert response.json() == {"detail": "Person with id 99 not found"}


def test_non_integer_id_is_unprocessable(client):
    assert client.get("/api/person/abc").status_code == 422


def test_post_malformed_json_is_bad_request(client):
    response = client.post(
        "/api/person",
        content=b'{"name": ',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "detail" in response.json()


def test_post_without_name_is_bad_request(client):
    response = client.post("/api/person", json={"age": 3})
    assert response.status_code == 400


def test_post_with_optional_fields(client):
    response = client.post(
        "/api/person", json={"name": "Dave", "age": 52, "date": "1972-03-04"}
    )
    assert response.status_code == 201
    assert response.json() == {"id": 2, "name": "Dave", "age": 52, "date": "1972-03-04"}


def test_post_duplicate_id_conflicts(client):
    response = client.post("/api/person", json={"id": 1, "name": "Mallory"})
    assert response.status_code == 409
    assert client.get("/api/person/1").json()["name"] == "Alice"


def test_update_by_path(client):
    response = client.put("/api/person/1", json={"name": "Alicia", "age": 31})
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Alicia", "age": 31}
    assert client.get("/api/person/1").json() == {"id": 1, "name": "Alicia", "age": 31}


def test_update_missing_person(client):
    assert client.put("/api/person/5", json={"name": "Ghost"}).status_code == 404


def test_update_by_body(client):
    response = client.put("/api/person", json={"id": 1, "name": "Alicia"})
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Alicia"}


def test_update_by_body_requires_id(client):
    assert client.put("/api/person", json={"name": "Alicia"}).status_code == 400


def test_delete_missing_person(client):
    assert client.delete("/api/person/5").status_code == 404
    assert len(client.get("/api/persons").json()) == 1


@pytest.mark.parametrize(
    "path,body",
    [
        ("/api/person/1", b'{"name": '),
        ("/api/person/1", b'{"age": 3}'),
        ("/api/person/1", b'{"name": "Alicia", "age": -1}'),
        ("/api/person", b'{"id": 1, "name": '),
        ("/api/person", b'{"id": 1}'),
    ],
)
def test_put_bad_body_is_bad_request(client, path, body):
    response = client.put(path, content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert "detail" in response.json()
    assert client.get("/api/person/1").json() == {"id": 1, "name": "Alice"}


@pytest.mark.parametrize(
    "method,path,body",
    [
        ("GET", "/api/persons", None),
        ("GET", "/api/person/1", None),
        ("POST", "/api/person", {"name": "Bob"}),
        ("PUT", "/api/person/1", {"name": "Alicia"}),
        ("PUT", "/api/person", {"id": 1, "name": "Alicia"}),
        ("DELETE", "/api/person/1", None),
    ],
)
def test_poisoned_store_fails_every_route(app, client, method, path, body):
    async def poison():
        async with app.state.store.lock.write():
            raise RuntimeError("write failed")

    with pytest.raises(RuntimeError):
        client.portal.call(poison)

    response = client.request(method, path, json=body)
    assert response.status_code == 500
    assert response.json() == {"detail": "Person store lock is poisoned"}


@pytest.mark.parametrize("person_id", ["-1", str(2**32)])
def test_out_of_range_path_id_is_unprocessable(client, person_id):
    assert client.get(f"/api/person/{person_id}").status_code == 422
    assert client.put(f"/api/person/{person_id}", json={"name": "X"}).status_code == 422
    assert client.delete(f"/api/person/{person_id}").status_code == 422


@pytest.mark.parametrize("person_id", [-1, 2**32, 2**70])
def test_out_of_range_body_id_is_bad_request(client, person_id):
    response = client.post("/api/person", json={"id": person_id, "name": "Big"})
    assert response.status_code == 400
    assert len(client.get("/api/persons").json()) == 1


def test_largest_id_is_accepted_then_ids_run_out(client):
    response = client.post("/api/person", json={"id": 2**32 - 1, "name": "Last"})
    assert response.status_code == 201
    assert response.json()["id"] == 2**32 - 1

    response = client.post("/api/person", json={"name": "Overflow"})
    assert response.status_code == 409
    assert response.json() == {"detail": "No person ids left to assign"}
    assert client.get("/api/persons").status_code == 200

import re

from user_registry.api.users import describe_violation
from user_registry.services.validation import Violation


async def test_index_returns_greeting(api_client) -> None:
    resp = await api_client.get("/")
    assert resp.status_code == 200
    assert resp.text == "hello my first get endpoint"


async def test_responses_include_x_request_id(api_client) -> None:
    resp = await api_client.get("/")
    assert resp.headers.get("x-request-id")


async def test_panic_is_isolated_and_server_keeps_serving(api_client) -> None:
    crashed = await api_client.get("/panic")
    assert crashed.status_code == 500
    assert crashed.text == "Internal Server Error"

    resp = await api_client.get("/")
    assert resp.status_code == 200


async def test_get_user_by_id_echoes_path_param(api_client, correlation_headers) -> None:
    resp = await api_client.get("/user/some-id", headers=correlation_headers)
    assert resp.status_code == 200
    assert resp.text == "User id is some-id"


async def test_create_user_returns_record_without_password(api_client, correlation_headers, valid_user) -> None:
    resp = await api_client.post("/user", json=valid_user, headers=correlation_headers)
    assert resp.status_code == 200
    payload = resp.json()
    assert set(payload) == {"uid", "firstName", "lastName", "email", "age"}
    assert payload["firstName"] == "Ada"
    assert payload["lastName"] == "Lovelace"
    assert payload["email"] == "ada@example.com"
    assert payload["age"] == 36
    assert re.fullmatch(r"[0-9a-f]{32}", payload["uid"])


async def test_create_user_underage_returns_violation(api_client, correlation_headers, valid_user) -> None:
    resp = await api_client.post("/user", json={**valid_user, "age": 17}, headers=correlation_headers)
    assert resp.status_code == 400
    payload = resp.json()
    assert payload["status"] == 400
    assert payload["errorDetail"] == [
        {"fieldName": "age", "description": "age field has an error because of that tag acceptAge"}
    ]


async def test_create_user_missing_first_name(api_client, correlation_headers, valid_user) -> None:
    body = dict(valid_user)
    del body["firstName"]
    resp = await api_client.post("/user", json=body, headers=correlation_headers)
    assert resp.status_code == 400
    details = resp.json()["errorDetail"]
    assert [d["fieldName"] for d in details] == ["firstName"]
    assert "required" in details[0]["description"]


async def test_create_user_reports_every_failing_field_in_order(api_client, correlation_headers) -> None:
    body = {"firstName": "A", "email": "x@example.com", "password": "short", "age": 12}
    resp = await api_client.post("/user", json=body, headers=correlation_headers)
    assert resp.status_code == 400
    details = resp.json()["errorDetail"]
    assert [d["fieldName"] for d in details] == ["firstName", "lastName", "password", "age"]
    assert details[0]["description"].endswith("tag min")
    assert details[1]["description"].endswith("tag required")


async def test_create_user_password_too_long(api_client, correlation_headers, valid_user) -> None:
    resp = await api_client.post("/user", json={**valid_user, "password": "p" * 17}, headers=correlation_headers)
    assert resp.status_code == 400
    assert resp.json()["errorDetail"][0]["description"] == "password field has an error because of that tag max"


async def test_create_user_malformed_json_returns_400(api_client, correlation_headers) -> None:
    resp = await api_client.post(
        "/user",
        content=b"{not json",
        headers={**correlation_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.text.startswith("There was an error while binding json")


async def test_create_user_does_not_coerce_string_age(api_client, correlation_headers, valid_user) -> None:
    resp = await api_client.post("/user", json={**valid_user, "age": "36"}, headers=correlation_headers)
    assert resp.status_code == 400
    assert "age" in resp.text


async def test_failed_create_stores_nothing(api_client, correlation_headers, valid_user) -> None:
    await api_client.post("/user", json={**valid_user, "age": 10}, headers=correlation_headers)
    resp = await api_client.get("/user", headers=correlation_headers)
    assert resp.status_code == 404


async def test_list_users_empty_returns_404(api_client, correlation_headers) -> None:
    resp = await api_client.get("/user", headers=correlation_headers)
    assert resp.status_code == 404
    assert resp.text == "There is no user"


async def test_list_users_returns_creation_order_and_count(api_client, correlation_headers, valid_user) -> None:
    names = ["Ada", "Grace", "Edsger"]
    for name in names:
        created = await api_client.post("/user", json={**valid_user, "firstName": name}, headers=correlation_headers)
        assert created.status_code == 200

    resp = await api_client.get("/user", headers=correlation_headers)
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["count"] == 3
    assert [u["firstName"] for u in payload["data"]] == names
    assert all("password" not in u for u in payload["data"])


async def test_duplicate_emails_are_accepted(api_client, correlation_headers, valid_user) -> None:
    for _ in range(2):
        resp = await api_client.post("/user", json=valid_user, headers=correlation_headers)
        assert resp.status_code == 200

    listing = await api_client.get("/user", headers=correlation_headers)
    assert listing.json()["count"] == 2


async def test_create_user_rejects_age_beyond_int32(api_client, correlation_headers, valid_user) -> None:
    resp = await api_client.post("/user", json={**valid_user, "age": 10**30}, headers=correlation_headers)
    assert resp.status_code == 400
    assert resp.text.startswith("There was an error while binding json")

    listing = await api_client.get("/user", headers=correlation_headers)
    assert listing.status_code == 404


async def test_create_user_accepts_int32_max_age(api_client, correlation_headers, valid_user) -> None:
    resp = await api_client.post("/user", json={**valid_user, "age": 2**31 - 1}, headers=correlation_headers)
    assert resp.status_code == 200
    assert resp.json()["age"] == 2**31 - 1


def test_violation_description_is_composed_from_field_and_tag() -> None:
    violation = Violation(field="password", tag="min", param="8", value="short")
    assert describe_violation(violation) == "password field has an error because of that tag min"

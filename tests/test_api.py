import pytest
from fastapi.testclient import TestClient

from employee_directory_api.app.core.security import decode_access_token
from employee_directory_api.app.main import create_app
from tests.conftest import employee_payload

SIGNUP = {"username": "jdoe", "email": "jdoe@example.com", "password": "s3cretpass"}


def _add(client, **overrides):
    response = client.post("/api/v1/employees/", json=employee_payload(**overrides))
    assert response.status_code == 201, response.text
    return response


def _ids(client):
    return [emp["id"] for emp in client.get("/api/v1/employees/").json()]


def test_info(client):
    response = client.get("/api/v1/info/")
    assert response.status_code == 200
    assert response.json() == {"message": "API is working!"}


def test_signup_and_login(client, settings):
    response = client.post("/api/v1/auth/signup", json=SIGNUP)
    assert response.status_code == 201
    assert response.json() == {"message": "User registered successfully!"}

    response = client.post("/api/v1/auth/login", json={"email": SIGNUP["email"], "password": SIGNUP["password"]})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    claims = decode_access_token(body["token"], settings.secret_key)
    assert claims["email"] == SIGNUP["email"]
    assert claims["exp"] - claims["iat"] == 3600


def test_signup_errors(client):
    response = client.post("/api/v1/auth/signup", json={**SIGNUP, "password": "123"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Password must be at least 6 characters long!"}

    client.post("/api/v1/auth/signup", json=SIGNUP)
    response = client.post("/api/v1/auth/signup", json={**SIGNUP, "username": "other"})
    assert response.status_code == 409
    assert response.json() == {"detail": "Email already in use"}


def test_login_errors(client):
    client.post("/api/v1/auth/signup", json=SIGNUP)
    response = client.post("/api/v1/auth/login", json={"email": SIGNUP["email"], "password": "wrongpass"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Incorrect password!"}

    response = client.post("/api/v1/auth/login", json={"email": "nobody@example.com", "password": "whatever"})
    assert response.status_code == 404
    assert response.json() == {"detail": "User not found!"}


def test_employee_crud(client):
    response = _add(client)
    assert response.json() == {"message": "Employee added successfully!"}

    (employee_id,) = _ids(client)
    record = client.get(f"/api/v1/employees/{employee_id}").json()
    assert record["first_name"] == "Ada"
    assert record["date_of_joining"] == "2024-03-01"
    assert record["employee_photo"] == ""
    assert "password" not in record

    response = client.put(f"/api/v1/employees/{employee_id}", json={"designation": "Lead", "salary": 8000})
    assert response.json() == {"message": "Employee updated successfully!"}
    updated = client.get(f"/api/v1/employees/{employee_id}").json()
    assert updated["designation"] == "Lead"
    assert updated["salary"] == 8000
    assert updated["last_name"] == "Lovelace"

    response = client.delete(f"/api/v1/employees/{employee_id}")
    assert response.json() == {"message": "Employee deleted successfully!"}
    response = client.delete(f"/api/v1/employees/{employee_id}")
    assert response.status_code == 404
    assert response.json() == {"detail": "Employee not found!"}


def test_employee_validation_and_conflict(client):
    response = client.post("/api/v1/employees/", json=employee_payload(salary=999))
    assert response.status_code == 400
    assert response.json() == {"detail": "Salary must be at least 1000!"}

    _add(client)
    response = client.post("/api/v1/employees/", json=employee_payload(first_name="Other"))
    assert response.status_code == 409
    assert response.json() == {"detail": "Employee with this email already exists!"}


def test_update_zero_salary_rejected(client):
    _add(client)
    (employee_id,) = _ids(client)
    response = client.put(f"/api/v1/employees/{employee_id}", json={"salary": 0})
    assert response.status_code == 400
    assert client.get(f"/api/v1/employees/{employee_id}").json()["salary"] == 5000


def test_search(client):
    _add(client, email="a@example.com", department="Eng")
    _add(client, email="b@example.com", department="Sales")

    assert len(client.get("/api/v1/employees/search").json()) == 2

    response = client.get("/api/v1/employees/search", params={"department": "Eng"})
    assert [emp["email"] for emp in response.json()] == ["a@example.com"]

    response = client.get("/api/v1/employees/search", params={"department": "Legal"})
    assert response.status_code == 404
    assert response.json() == {"detail": "No employees found with the given criteria!"}


def test_get_unknown_employee(client):
    response = client.get("/api/v1/employees/does-not-exist")
    assert response.status_code == 404


@pytest.fixture
def protected_client(settings):
    settings.employee_auth_required = True
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def test_employee_routes_require_token_when_enabled(protected_client):
    response = protected_client.get("/api/v1/employees/")
    assert response.status_code == 401

    response = protected_client.get("/api/v1/employees/", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401

    protected_client.post("/api/v1/auth/signup", json=SIGNUP)
    token = protected_client.post(
        "/api/v1/auth/login", json={"email": SIGNUP["email"], "password": SIGNUP["password"]}
    ).json()["token"]
    response = protected_client.get("/api/v1/employees/", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json() == []


def _raw_post(client, url, body):
    return client.post(url, content=body, headers={"Content-Type": "application/json"})


@pytest.mark.parametrize("literal", ["1e999", "-1e999", "NaN", "Infinity", '"NaN"', '"abc"'])
def test_add_employee_rejects_non_finite_or_non_numeric_salary(client, literal):
    body = (
        '{"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com", '
        '"gender": "Female", "designation": "Engineer", "department": "Eng", '
        f'"salary": {literal}}}'
    )
    response = _raw_post(client, "/api/v1/employees/", body)
    assert response.status_code == 400
    assert response.json() == {"detail": "Salary must be at least 1000!"}
    assert client.get("/api/v1/employees/").json() == []


@pytest.mark.parametrize("literal", ["1e999", "NaN"])
def test_update_employee_rejects_non_finite_salary(client, literal):
    _add(client)
    (employee_id,) = _ids(client)
    response = client.put(
        f"/api/v1/employees/{employee_id}",
        content=f'{{"salary": {literal}}}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "Salary must be at least 1000!"}
    assert client.get(f"/api/v1/employees/{employee_id}").json()["salary"] == 5000


def test_wrongly_typed_fields_report_first_violation(client):
    response = client.post("/api/v1/employees/", json=employee_payload(first_name=12))
    assert response.status_code == 400
    assert response.json() == {"detail": "First name must be at least 2 characters long!"}

    response = client.post("/api/v1/employees/", json=employee_payload(first_name="A", salary="abc"))
    assert response.status_code == 400
    assert response.json() == {"detail": "First name must be at least 2 characters long!"}

    response = client.post("/api/v1/auth/signup", json={**SIGNUP, "username": 123})
    assert response.status_code == 400
    assert response.json() == {"detail": "Username must be at least 3 characters long!"}


def test_malformed_body_is_a_400_with_message(client):
    response = client.post("/api/v1/auth/login", json={"email": SIGNUP["email"], "password": 123456})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert isinstance(detail, str)
    assert detail.startswith("Invalid password:")

    response = client.post("/api/v1/employees/", json=["not", "an", "object"])
    assert response.status_code == 400
    assert isinstance(response.json()["detail"], str)

    response = _raw_post(client, "/api/v1/employees/", "{not json")
    assert response.status_code == 400
    assert isinstance(response.json()["detail"], str)

"""
tests/test_session_gate.py: Cookie gate in front of the admin pages
"""
import pytest
from fastapi.responses import HTMLResponse
from fastapi.testclient import TestClient

from app.config import settings
from app.core.security import hash_password
from app.middleware.session_gate import is_protected_path

PREFIXES = ["/admin-home", "/general-setup", "/targeting-setup"]


@pytest.fixture
def page_client(application) -> TestClient:
    """App with stand-in pages behind (and beside) the protected prefixes."""

    @application.get("/", response_class=HTMLResponse)
    def login_page():
        return "login"

    @application.get("/admin-home", response_class=HTMLResponse)
    def admin_home():
        return "dashboard"

    @application.get("/general-setup/{step}", response_class=HTMLResponse)
    def general_setup(step: str):
        return f"setup {step}"

    @application.get("/admin-homework", response_class=HTMLResponse)
    def admin_homework():
        return "public"

    return TestClient(application)


@pytest.mark.parametrize("path, protected", [
    ("/admin-home", True),
    ("/admin-home/", True),
    ("/admin-home/reports/2024", True),
    ("/general-setup", True),
    ("/targeting-setup/audience", True),
    ("/admin-homework", False),
    ("/", False),
    ("/recruiting", False),
    ("/api/auth/login", False),
])
def test_protected_path_matching(path, protected):
    assert is_protected_path(path, PREFIXES) is protected


def test_default_prefixes_cover_admin_and_setup_pages():
    assert settings.protected_prefixes_list == PREFIXES


def test_unauthenticated_request_is_redirected_to_login(page_client):
    response = page_client.get("/admin-home", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/"


def test_descendant_paths_are_gated(page_client):
    response = page_client.get("/general-setup/step-2", follow_redirects=False)
    assert response.status_code == 307


def test_wrong_cookie_value_is_redirected(page_client):
    response = page_client.get(
        "/admin-home", headers={"Cookie": "session=admin"}, follow_redirects=False
    )
    assert response.status_code == 307


def test_exact_cookie_value_is_let_through(page_client):
    response = page_client.get(
        "/admin-home", headers={"Cookie": "session=authenticated"}, follow_redirects=False
    )
    assert response.status_code == 200
    assert response.text == "dashboard"


def test_unprotected_lookalike_path_is_not_gated(page_client):
    response = page_client.get("/admin-homework", follow_redirects=False)
    assert response.status_code == 200


def test_login_then_logout_round_trip(page_client, gateway):
    gateway.collections[settings.mongo_collection].append({
        "username": "4821937460",
        "password": hash_password("Gr33nLeafX"),
        "status": "active",
    })

    login = page_client.post("/api/auth/login", json={"username": "4821937460", "password": "Gr33nLeafX"})
    assert login.status_code == 200
    assert page_client.get("/admin-home", follow_redirects=False).status_code == 200

    page_client.post("/api/auth/logout")
    assert page_client.get("/admin-home", follow_redirects=False).status_code == 307

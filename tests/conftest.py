from __future__ import annotations

import os
from typing import Iterator, Optional

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from factories import ADMIN_USER, EMPLOYEE_USER
from src.api.dependencies import get_current_user
from src.main import create_app
from src.schemas.employees import CurrentUser


def build_client(app: FastAPI, user: Optional[CurrentUser]) -> TestClient:
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
    return TestClient(app)


@pytest.fixture()
def app() -> Iterator[FastAPI]:
    application = create_app()
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return build_client(app, EMPLOYEE_USER)


@pytest.fixture()
def admin_client(app: FastAPI) -> TestClient:
    return build_client(app, ADMIN_USER)


@pytest.fixture()
def anonymous_client(app: FastAPI) -> TestClient:
    return build_client(app, None)

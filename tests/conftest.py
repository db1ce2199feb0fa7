from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import Settings
from data_store import InMemoryReservationStore
from intake import ReservationService
from main import create_app
from notifications import ReservationNotifier
from tests.fakes import RecordingTransport
from tests.util_constant import FIXED_NOW, OPERATOR_EMAIL

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        EMAIL_USER=None,
        EMAIL_PASS=None,
        STORE_BACKEND="memory",
        FRONTEND_DIR=str(PROJECT_ROOT / "static"),
        LOG_DIR=None,
    )


@pytest.fixture
def store() -> InMemoryReservationStore:
    return InMemoryReservationStore()


@pytest.fixture
def service(store) -> ReservationService:
    return ReservationService(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def notifier(transport) -> ReservationNotifier:
    return ReservationNotifier(transport, OPERATOR_EMAIL)


@pytest.fixture
def client(settings, store, notifier):
    app = create_app(settings=settings, store=store, notifier=notifier)
    with TestClient(app) as c:
        yield c

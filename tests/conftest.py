import threading
from datetime import datetime, timezone

import mongomock
import pytest

from plantnet import create_app
from plantnet.errors import NotificationError
from plantnet.store import Store

TEST_CONFIG = {
    "TESTING": True,
    "JWT_SECRET_KEY": "test-secret",
    "JWT_COOKIE_SECURE": False,
    "JWT_COOKIE_SAMESITE": "Strict",
    "TRUSTED_PROXY_HOPS": 0,
    "LOG_LEVEL": "WARNING",
}


class RecordingMailer:
    def __init__(self):
        self.sent = []
        self.fail = False
        self._lock = threading.Lock()

    def send(self, recipient, subject, html):
        with self._lock:
            self.sent.append({"to": recipient, "subject": subject, "html": html})
        if self.fail:
            raise NotificationError("mail server unavailable")
        return "email-id"


class RecordingGateway:
    def __init__(self):
        self.amounts = []

    def create_payment_intent(self, amount):
        self.amounts.append(amount)
        return "pi_123_secret_456"


@pytest.fixture
def store():
    return Store(mongomock.MongoClient().db)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def app(store, mailer, gateway):
    app = create_app(TEST_CONFIG, store=store, mailer=mailer, payment_gateway=gateway)
    yield app
    app.extensions["plantnet"].notifier.close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_user(store):
    def _add_user(email, role="customer", **fields):
        document = {
            "email": email,
            "name": email.split("@")[0].title(),
            "role": role,
            "createdAt": datetime.now(timezone.utc),
        }
        document.update(fields)
        store.users.insert_one(document)
        return document

    return _add_user


@pytest.fixture
def add_plant(store):
    def _add_plant(seller_email="seller@x.com", **fields):
        document = {
            "name": "Monstera",
            "category": "Indoor",
            "price": 12.5,
            "quantity": 10,
            "image": "https://img.example/monstera.png",
            "seller": {"email": seller_email, "name": "Seller"},
        }
        document.update(fields)
        result = store.plants.insert_one(document)
        return result.inserted_id

    return _add_plant


@pytest.fixture
def login(client):
    def _login(email):
        response = client.post("/jwt", json={"email": email})
        assert response.status_code == 200
        return response

    return _login

"""
Shared pytest fixtures.

The app is built with index creation disabled, then its database handle is
swapped for an in-memory mongomock database so no MongoDB server is needed.
"""

import mongomock
import pytest

from noveltopia.app import create_app
from noveltopia.extensions import close_mongo, ensure_indexes


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'MONGO_URI': 'mongodb://localhost:27017/noveltopia_test',
        'MONGO_ENSURE_INDEXES': False,
        'BCRYPT_LOG_ROUNDS': 4,
    })
    close_mongo(app)
    client = mongomock.MongoClient()
    app.extensions['mongo_client'] = client
    app.extensions['mongo_db'] = client['noveltopia_test']
    ensure_indexes(app.extensions['mongo_db'])
    yield app
    close_mongo(app)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mongo_db(app):
    return app.extensions['mongo_db']


@pytest.fixture
def registered_user(client):
    """Signs up alice / secret1 and returns the submitted credentials."""
    payload = {'username': 'alice', 'password': 'secret1', 'email': 'a@x.com'}
    response = client.post('/signup', json=payload)
    assert response.status_code == 201
    return payload

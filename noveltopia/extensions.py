from flask import current_app
from flask_pymongo import PyMongo
from flask_bcrypt import Bcrypt

from noveltopia.mongo_models import UNIQUE_INDEXES

BCRYPT_MAX_PASSWORD_BYTES = 72

# 각 Flask 확장 기능의 인스턴스를 생성합니다.
# 이 인스턴스들은 app.py의 create_app()에서 애플리케이션과 연결됩니다.
mongo = PyMongo()
bcrypt = Bcrypt()


def get_mongo_db():
    """Returns the database handle bound to the current app."""
    db_mongo = current_app.extensions.get("mongo_db")
    if db_mongo is None:
        raise ConnectionError("MongoDB is not configured or connected.")
    return db_mongo


def ensure_indexes(db_mongo):
    """Creates the unique indexes that back the username, email and title checks."""
    for collection_name, fields in UNIQUE_INDEXES.items():
        for field in fields:
            db_mongo[collection_name].create_index(field, unique=True)


def close_mongo(app):
    client = app.extensions.pop("mongo_client", None)
    app.extensions.pop("mongo_db", None)
    if client is not None:
        client.close()
        app.logger.info("MongoDB connection closed")


def bcrypt_password(password):
    """bcrypt only reads the first 72 bytes; longer input is cut there, not rejected."""
    if not isinstance(password, bytes):
        password = str(password).encode('utf-8')
    return password[:BCRYPT_MAX_PASSWORD_BYTES]

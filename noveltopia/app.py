import os
import logging
from logging.handlers import RotatingFileHandler
from urllib.parse import urlparse

from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv
from pymongo.errors import PyMongoError
from werkzeug.middleware.proxy_fix import ProxyFix

from noveltopia.extensions import mongo, bcrypt, ensure_indexes, close_mongo

DEFAULT_MONGO_URI = 'mongodb://localhost:27017/noveltopia'
DEFAULT_MONGO_DBNAME = 'noveltopia'

load_dotenv()


def create_app(test_config=None):
    app = Flask(__name__)

    # --- 기본 설정 ---
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev')
    app.config['PORT'] = int(os.environ.get('PORT', 3000))
    app.config['BCRYPT_LOG_ROUNDS'] = int(os.environ.get('BCRYPT_LOG_ROUNDS', 10))
    app.config['LOG_DIR'] = os.environ.get('LOG_DIR', 'logs')
    app.config['MONGO_URI'] = (os.environ.get("MONGO_URL") or os.environ.get("MONGODB_URI")
                               or os.environ.get("MONGO_URI") or DEFAULT_MONGO_URI)
    app.config['MONGO_SERVER_SELECTION_TIMEOUT_MS'] = int(
        os.environ.get('MONGO_SERVER_SELECTION_TIMEOUT_MS', 5000))
    app.config['MONGO_ENSURE_INDEXES'] = True

    if test_config:
        app.config.from_mapping(test_config)

    # --- 로깅 설정 ---
    if not app.testing:
        configure_logging(app)
    app.logger.info('Noveltopia startup')

    # --- 데이터베이스 설정 ---
    mongo_uri = app.config['MONGO_URI']
    db_name = None
    try:
        db_name = urlparse(mongo_uri).path.lstrip('/')
    except ValueError:
        db_name = None
    app.config['MONGO_DBNAME'] = app.config.get('MONGO_DBNAME') or db_name or DEFAULT_MONGO_DBNAME

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
    CORS(app, origins='*', send_wildcard=True)

    # --- Flask 확장 프로그램 초기화 ---
    # 클라이언트는 첫 쿼리 때 연결하므로 MongoDB가 꺼져 있어도 서버는 시작됩니다.
    mongo.init_app(app, serverSelectionTimeoutMS=app.config['MONGO_SERVER_SELECTION_TIMEOUT_MS'])
    bcrypt.init_app(app)
    app.extensions['mongo_client'] = mongo.cx
    app.extensions['mongo_db'] = mongo.cx[app.config['MONGO_DBNAME']]

    if app.config['MONGO_ENSURE_INDEXES']:
        try:
            ensure_indexes(app.extensions['mongo_db'])
            app.logger.info(f"Connected to MongoDB ({app.config['MONGO_DBNAME']})")
        except PyMongoError as e:
            app.logger.error(f"MongoDB connection error: {e}")

    # --- API 블루프린트 등록 ---
    from noveltopia.routes.auth_routes import auth_bp
    from noveltopia.routes.book_routes import book_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(book_bp)

    # --- CLI 명령어 등록 ---
    @app.cli.command("init-db")
    def init_db_command():
        """Creates the unique indexes on users and books."""
        ensure_indexes(app.extensions['mongo_db'])
        print("Indexes created.")

    # --- 에러 핸들러 ---
    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify(error="Not found"), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify(error="Method not allowed"), 405

    return app


def configure_logging(app):
    log_dir = app.config['LOG_DIR']
    if not os.path.exists(log_dir):
        os.mkdir(log_dir)
    file_handler = RotatingFileHandler(os.path.join(log_dir, 'noveltopia.log'),
                                       maxBytes=10240, backupCount=10)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)


def main():
    app = create_app()
    port = app.config['PORT']
    app.logger.info(f"Server running at http://localhost:{port}")
    try:
        app.run(host='0.0.0.0', port=port)
    finally:
        close_mongo(app)


if __name__ == '__main__':
    main()

from noveltopia.app import create_app
from noveltopia.extensions import close_mongo


def test_unknown_route_returns_json_404(client):
    response = client.get('/nope')

    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}


def test_wrong_method_returns_json_405(client):
    response = client.get('/signup')

    assert response.status_code == 405
    assert response.get_json() == {'error': 'Method not allowed'}


def test_all_origins_allowed(client):
    response = client.post('/login', json={'username': 'nobody', 'password': 'x'},
                           headers={'Origin': 'http://example.com'})

    assert response.headers.get('Access-Control-Allow-Origin') == '*'


def test_database_name_comes_from_uri():
    app = create_app({
        'TESTING': True,
        'MONGO_URI': 'mongodb://localhost:27017/shelf',
        'MONGO_ENSURE_INDEXES': False,
    })

    assert app.config['MONGO_DBNAME'] == 'shelf'
    assert app.extensions['mongo_db'].name == 'shelf'
    close_mongo(app)
    assert 'mongo_db' not in app.extensions


def test_defaults(monkeypatch):
    for name in ('PORT', 'MONGO_URL', 'MONGODB_URI', 'MONGO_URI', 'BCRYPT_LOG_ROUNDS'):
        monkeypatch.delenv(name, raising=False)

    app = create_app({'TESTING': True, 'MONGO_ENSURE_INDEXES': False})

    assert app.config['PORT'] == 3000
    assert app.config['BCRYPT_LOG_ROUNDS'] == 10
    assert app.config['MONGO_URI'] == 'mongodb://localhost:27017/noveltopia'
    assert app.config['MONGO_DBNAME'] == 'noveltopia'
    close_mongo(app)


def test_unique_indexes_created(mongo_db):
    user_indexes = mongo_db.users.index_information()
    unique_keys = {info['key'][0][0] for info in user_indexes.values() if info.get('unique')}
    assert unique_keys == {'username', 'email'}

    book_indexes = mongo_db.books.index_information()
    assert any(info.get('unique') and info['key'][0][0] == 'booktitle'
               for info in book_indexes.values())


def test_starts_without_database(caplog):
    app = create_app({
        'TESTING': True,
        'MONGO_URI': 'mongodb://127.0.0.1:1/x',
        'MONGO_SERVER_SELECTION_TIMEOUT_MS': 200,
        'MONGO_ENSURE_INDEXES': True,
        'BCRYPT_LOG_ROUNDS': 4,
    })

    assert 'MongoDB connection error' in caplog.text

    response = app.test_client().post('/signup', json={
        'username': 'alice', 'password': 'secret1', 'email': 'a@x.com'})

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Server error during signup'}
    close_mongo(app)

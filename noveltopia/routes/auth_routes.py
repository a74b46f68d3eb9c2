from flask import Blueprint, jsonify, current_app
from pymongo.errors import DuplicateKeyError

from noveltopia.extensions import bcrypt, bcrypt_password, get_mongo_db
from noveltopia.mongo_models import User
from noveltopia.routes import get_request_data

auth_bp = Blueprint('auth_api', __name__)

# --- 회원가입 관련 API ---

@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = get_request_data()
    username = data.get('username')
    password = data.get('password')
    email = data.get('email')

    if not all([username, password, email]):
        return jsonify({'error': 'Username, password and email are required'}), 400

    try:
        db_mongo = get_mongo_db()
        existing_user = db_mongo.users.find_one({'$or': [{'username': username}, {'email': email}]})
        if existing_user:
            return jsonify({'error': 'Username or email already taken'}), 409

        hashed_password = bcrypt.generate_password_hash(bcrypt_password(password)).decode('utf-8')

        new_user = User(username=username, password=hashed_password, email=email)
        db_mongo.users.insert_one(new_user.to_mongo())

        current_app.logger.info(f"New user registered: {username}")
        return jsonify({'message': f'Registration successful. Welcome, {username}!'}), 201

    except DuplicateKeyError:
        # 동시 요청이 사전 확인을 통과한 경우 고유 인덱스가 막아줍니다.
        return jsonify({'error': 'Username or email already taken'}), 409
    except Exception as e:
        current_app.logger.error(f"Signup error: {e}", exc_info=True)
        return jsonify({'error': 'Server error during signup'}), 500

# --- 로그인 관련 API ---

@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_request_data()
    username = data.get('username')
    password = data.get('password')

    try:
        db_mongo = get_mongo_db()
        user_data = db_mongo.users.find_one({'username': username}) if username else None

        if not user_data:
            return jsonify({'success': False, 'message': 'Cannot find username!'}), 401

        user = User.from_mongo(user_data)
        if not password or not bcrypt.check_password_hash(user.password, bcrypt_password(password)):
            return jsonify({'success': False, 'message': 'Wrong password!'}), 401

        return jsonify({
            'success': True,
            'message': 'Login successful',
            'user': user.to_public_dict()
        }), 200

    except Exception as e:
        current_app.logger.error(f"Login error: {e}", exc_info=True)
        return jsonify({'error': 'Server error during login'}), 500

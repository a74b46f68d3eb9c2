from flask import Blueprint, jsonify, current_app
from pymongo.errors import DuplicateKeyError

from noveltopia.extensions import get_mongo_db
from noveltopia.mongo_models import Book
from noveltopia.routes import get_request_data

book_bp = Blueprint('book_api', __name__)

# --- 작품 관련 API ---

# 작품 작성
@book_bp.route('/writebook', methods=['POST'])
def write_book():
    data = get_request_data()
    booktitle = data.get('booktitle')
    bookauthor = data.get('bookauthor')
    bookgenre = data.get('bookgenre')

    if not all([booktitle, bookauthor, bookgenre]):
        return jsonify({'error': 'Book title, author, and genre are required'}), 400

    try:
        db_mongo = get_mongo_db()
        if db_mongo.books.find_one({'booktitle': booktitle}):
            return jsonify({'error': 'Book title already exists'}), 409

        new_book = Book(
            booktitle=booktitle,
            bookauthor=bookauthor,
            bookgenre=bookgenre,
            bookdesc=data.get('bookdesc'),
            content=data.get('content'),
            bookcover=data.get('bookcover')
        )
        inserted_book = db_mongo.books.insert_one(new_book.to_mongo())
        new_book._id = inserted_book.inserted_id

        return jsonify({'message': 'Book created successfully', 'book': new_book.to_dict()}), 201

    except DuplicateKeyError:
        return jsonify({'error': 'Book title already exists'}), 409
    except Exception as e:
        current_app.logger.error(f"Book creation error: {e}", exc_info=True)
        return jsonify({'error': 'Server error during book creation'}), 500

# 작품 목록 조회 (최신순 정렬)
@book_bp.route('/books', methods=['GET'])
def get_books():
    try:
        db_mongo = get_mongo_db()
        books_cursor = db_mongo.books.find().sort('createdAt', -1)
        books = [Book.from_mongo(book).to_dict() for book in books_cursor]
        return jsonify({'books': books}), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching books: {e}", exc_info=True)
        return jsonify({'error': 'Server error while fetching books'}), 500

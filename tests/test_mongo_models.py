import datetime

from bson.objectid import ObjectId

from noveltopia.mongo_models import Blog, Book, Chapter, Comment, Like, User


def test_user_public_dict_hides_password():
    user = User(username='alice', password='$2b$10$hash', email='a@x.com')

    assert user.to_public_dict() == {'username': 'alice', 'email': 'a@x.com'}
    assert user.to_mongo()['genre'] == 'General'


def test_book_from_mongo_serializes_id_and_timestamps():
    created = datetime.datetime(2024, 5, 1, 12, 0, 0)
    book_id = ObjectId()
    book = Book.from_mongo({
        '_id': book_id, 'booktitle': 'T', 'bookauthor': 'A', 'bookgenre': 'G',
        'createdAt': created, 'updatedAt': created,
    })

    data = book.to_dict()
    assert data['_id'] == str(book_id)
    assert data['createdAt'] == '2024-05-01T12:00:00.000Z'
    assert 'bookcover' not in data


def test_blog_date_defaults_to_creation_time():
    blog = Blog(blogtitle='t', blogauthor='a', blogcontent='c')

    assert blog.blogdate == blog.createdAt
    assert blog.missing_fields() == []
    assert Blog(blogtitle='t', blogauthor='', blogcontent=None).missing_fields() == ['blogauthor', 'blogcontent']


def test_comment_references_are_object_ids():
    user_id = ObjectId()
    comment = Comment(userId=str(user_id), comment='nice', bookId=str(ObjectId()))

    assert comment.userId == user_id
    assert comment.blogsid is None
    assert comment.to_dict()['userId'] == str(user_id)


def test_like_value_is_stored_as_given():
    like = Like(userId=ObjectId(), chaptersId=ObjectId(), like='true')

    assert like.to_mongo()['like'] == 'true'
    assert Like(userId=ObjectId(), chaptersId=None, like='').missing_fields() == ['chaptersId', 'like']


def test_chapter_number_zero_is_present():
    chapter = Chapter(bookId=ObjectId(), chapterTitle='Prologue', chapterContent='...', chapterNumber=0)

    assert chapter.missing_fields() == []
    assert Chapter.from_mongo(chapter.to_mongo()).chapterNumber == 0

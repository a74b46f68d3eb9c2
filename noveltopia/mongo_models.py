import datetime

from bson.objectid import ObjectId

# 컬렉션별 고유 인덱스 필드
UNIQUE_INDEXES = {
    'users': ('username', 'email'),
    'books': ('booktitle',),
    'blogs': ('blogtitle',),
}


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


def _isoformat(value):
    # MongoDB는 UTC 밀리초 단위로 저장하므로 저장 전후 값이 같은 문자열이 되도록 맞춥니다.
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec='milliseconds') + 'Z'
    return value


def _object_id_str(value):
    return str(value) if isinstance(value, ObjectId) else value


def _to_object_id(value):
    if value is None or isinstance(value, ObjectId):
        return value
    return ObjectId(value)


class User:
    """
    사용자 계정 모델 (MongoDB 'users' 컬렉션)
    password에는 항상 bcrypt 해시만 저장됩니다.
    """
    collection = 'users'

    def __init__(self, username, password, email, genre='General', profilePicture='',
                 _id=None, createdAt=None, updatedAt=None):
        self.username = username
        self.password = password
        self.email = email
        self.genre = genre if genre is not None else 'General'
        self.profilePicture = profilePicture if profilePicture is not None else ''
        self.createdAt = createdAt if createdAt else _utcnow()
        self.updatedAt = updatedAt if updatedAt else self.createdAt
        if _id:
            self._id = _id

    def to_mongo(self):
        return {
            'username': self.username,
            'password': self.password,
            'email': self.email,
            'genre': self.genre,
            'profilePicture': self.profilePicture,
            'createdAt': self.createdAt,
            'updatedAt': self.updatedAt,
        }

    def to_public_dict(self):
        return {
            'username': self.username,
            'email': self.email,
        }

    @staticmethod
    def from_mongo(data):
        return User(
            username=data.get('username'),
            password=data.get('password'),
            email=data.get('email'),
            genre=data.get('genre'),
            profilePicture=data.get('profilePicture'),
            _id=data.get('_id'),
            createdAt=data.get('createdAt'),
            updatedAt=data.get('updatedAt'),
        )


class Book:
    """
    작품 모델 (MongoDB 'books' 컬렉션)
    """
    collection = 'books'
    OPTIONAL_FIELDS = ('bookdesc', 'content', 'bookcover')

    def __init__(self, booktitle, bookauthor, bookgenre, bookdesc=None, content=None, bookcover=None,
                 _id=None, createdAt=None, updatedAt=None):
        self.booktitle = booktitle
        self.bookauthor = bookauthor
        self.bookgenre = bookgenre
        self.bookdesc = bookdesc
        self.content = content
        self.bookcover = bookcover
        self.createdAt = createdAt if createdAt else _utcnow()
        self.updatedAt = updatedAt if updatedAt else self.createdAt
        if _id:
            self._id = _id

    def to_mongo(self):
        # 값이 없는 선택 필드는 저장하지 않습니다.
        document = {
            'booktitle': self.booktitle,
            'bookauthor': self.bookauthor,
            'bookgenre': self.bookgenre,
        }
        for field in self.OPTIONAL_FIELDS:
            value = getattr(self, field)
            if value is not None:
                document[field] = value
        document['createdAt'] = self.createdAt
        document['updatedAt'] = self.updatedAt
        return document

    def to_dict(self):
        data = {'_id': str(self._id) if hasattr(self, '_id') else None}
        for key, value in self.to_mongo().items():
            data[key] = _isoformat(value)
        return data

    @staticmethod
    def from_mongo(data):
        return Book(
            booktitle=data.get('booktitle'),
            bookauthor=data.get('bookauthor'),
            bookgenre=data.get('bookgenre'),
            bookdesc=data.get('bookdesc'),
            content=data.get('content'),
            bookcover=data.get('bookcover'),
            _id=data.get('_id'),
            createdAt=data.get('createdAt'),
            updatedAt=data.get('updatedAt'),
        )


# --- 아직 라우트가 없는 모델들 ---
# 아래 모델들은 저장 형식만 정의하며, 이를 쓰는 API는 없습니다.

class Blog:
    collection = 'blogs'
    REQUIRED_FIELDS = ('blogtitle', 'blogauthor', 'blogcontent')

    def __init__(self, blogtitle, blogauthor, blogcontent, blogdate=None,
                 _id=None, createdAt=None, updatedAt=None):
        self.blogtitle = blogtitle
        self.blogauthor = blogauthor
        self.blogcontent = blogcontent
        self.createdAt = createdAt if createdAt else _utcnow()
        self.updatedAt = updatedAt if updatedAt else self.createdAt
        self.blogdate = blogdate if blogdate else self.createdAt
        if _id:
            self._id = _id

    def missing_fields(self):
        return [field for field in self.REQUIRED_FIELDS if not getattr(self, field)]

    def to_mongo(self):
        return {
            'blogtitle': self.blogtitle,
            'blogauthor': self.blogauthor,
            'blogcontent': self.blogcontent,
            'blogdate': self.blogdate,
            'createdAt': self.createdAt,
            'updatedAt': self.updatedAt,
        }

    def to_dict(self):
        return {
            '_id': str(self._id) if hasattr(self, '_id') else None,
            'blogtitle': self.blogtitle,
            'blogauthor': self.blogauthor,
            'blogcontent': self.blogcontent,
            'blogdate': _isoformat(self.blogdate),
            'createdAt': _isoformat(self.createdAt),
            'updatedAt': _isoformat(self.updatedAt),
        }

    @staticmethod
    def from_mongo(data):
        return Blog(
            blogtitle=data.get('blogtitle'),
            blogauthor=data.get('blogauthor'),
            blogcontent=data.get('blogcontent'),
            blogdate=data.get('blogdate'),
            _id=data.get('_id'),
            createdAt=data.get('createdAt'),
            updatedAt=data.get('updatedAt'),
        )


class Comment:
    """
    블로그 또는 작품에 달린 댓글. blogsid와 bookId 중 하나만 채워지는 것을
    전제로 하지만 강제하지는 않습니다.
    """
    collection = 'comments'
    REQUIRED_FIELDS = ('userId', 'comment')

    def __init__(self, userId, comment, blogsid=None, bookId=None,
                 _id=None, createdAt=None, updatedAt=None):
        self.blogsid = _to_object_id(blogsid)
        self.bookId = _to_object_id(bookId)
        self.userId = _to_object_id(userId)
        self.comment = comment
        self.createdAt = createdAt if createdAt else _utcnow()
        self.updatedAt = updatedAt if updatedAt else self.createdAt
        if _id:
            self._id = _id

    def missing_fields(self):
        return [field for field in self.REQUIRED_FIELDS if not getattr(self, field)]

    def to_mongo(self):
        return {
            'blogsid': self.blogsid,
            'bookId': self.bookId,
            'userId': self.userId,
            'comment': self.comment,
            'createdAt': self.createdAt,
            'updatedAt': self.updatedAt,
        }

    def to_dict(self):
        return {
            '_id': str(self._id) if hasattr(self, '_id') else None,
            'blogsid': _object_id_str(self.blogsid),
            'bookId': _object_id_str(self.bookId),
            'userId': _object_id_str(self.userId),
            'comment': self.comment,
            'createdAt': _isoformat(self.createdAt),
            'updatedAt': _isoformat(self.updatedAt),
        }

    @staticmethod
    def from_mongo(data):
        return Comment(
            userId=data.get('userId'),
            comment=data.get('comment'),
            blogsid=data.get('blogsid'),
            bookId=data.get('bookId'),
            _id=data.get('_id'),
            createdAt=data.get('createdAt'),
            updatedAt=data.get('updatedAt'),
        )


class Like:
    """
    좋아요 기록. like 값은 기존 데이터와 호환되도록 문자열로 저장합니다.
    타임스탬프가 없습니다.
    """
    collection = 'likes'
    REQUIRED_FIELDS = ('userId', 'chaptersId', 'like')

    def __init__(self, userId, chaptersId, like, blogsid=None, bookId=None, _id=None):
        self.blogsid = _to_object_id(blogsid)
        self.bookId = _to_object_id(bookId)
        self.userId = _to_object_id(userId)
        self.chaptersId = _to_object_id(chaptersId)
        self.like = like
        if _id:
            self._id = _id

    def missing_fields(self):
        return [field for field in self.REQUIRED_FIELDS if not getattr(self, field)]

    def to_mongo(self):
        return {
            'blogsid': self.blogsid,
            'bookId': self.bookId,
            'userId': self.userId,
            'chaptersId': self.chaptersId,
            'like': self.like,
        }

    def to_dict(self):
        data = {'_id': str(self._id) if hasattr(self, '_id') else None}
        for key, value in self.to_mongo().items():
            data[key] = _object_id_str(value)
        return data

    @staticmethod
    def from_mongo(data):
        return Like(
            userId=data.get('userId'),
            chaptersId=data.get('chaptersId'),
            like=data.get('like'),
            blogsid=data.get('blogsid'),
            bookId=data.get('bookId'),
            _id=data.get('_id'),
        )


class Chapter:
    collection = 'chapters'
    REQUIRED_FIELDS = ('bookId', 'chapterTitle', 'chapterContent', 'chapterNumber')

    def __init__(self, bookId, chapterTitle, chapterContent, chapterNumber,
                 _id=None, createdAt=None, updatedAt=None):
        self.bookId = _to_object_id(bookId)
        self.chapterTitle = chapterTitle
        self.chapterContent = chapterContent
        self.chapterNumber = chapterNumber
        self.createdAt = createdAt if createdAt else _utcnow()
        self.updatedAt = updatedAt if updatedAt else self.createdAt
        if _id:
            self._id = _id

    def missing_fields(self):
        # chapterNumber는 0도 유효한 값입니다.
        return [field for field in self.REQUIRED_FIELDS
                if getattr(self, field) is None or getattr(self, field) == '']

    def to_mongo(self):
        return {
            'bookId': self.bookId,
            'chapterTitle': self.chapterTitle,
            'chapterContent': self.chapterContent,
            'chapterNumber': self.chapterNumber,
            'createdAt': self.createdAt,
            'updatedAt': self.updatedAt,
        }

    def to_dict(self):
        return {
            '_id': str(self._id) if hasattr(self, '_id') else None,
            'bookId': _object_id_str(self.bookId),
            'chapterTitle': self.chapterTitle,
            'chapterContent': self.chapterContent,
            'chapterNumber': self.chapterNumber,
            'createdAt': _isoformat(self.createdAt),
            'updatedAt': _isoformat(self.updatedAt),
        }

    @staticmethod
    def from_mongo(data):
        return Chapter(
            bookId=data.get('bookId'),
            chapterTitle=data.get('chapterTitle'),
            chapterContent=data.get('chapterContent'),
            chapterNumber=data.get('chapterNumber'),
            _id=data.get('_id'),
            createdAt=data.get('createdAt'),
            updatedAt=data.get('updatedAt'),
        )

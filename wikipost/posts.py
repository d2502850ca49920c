import logging
import os
import tempfile
from dataclasses import dataclass

POSTS_DIR = 'posts'
POST_EXTENSION = '.txt'
POST_FILE_MODE = 0o644


class PostError(Exception):
    pass


class PostNotFound(PostError):
    pass


class ReadError(PostError):
    pass


class StorageUnavailable(PostError):
    pass


class WriteError(PostError):
    pass


class InvalidTitle(ValueError):
    pass


class EmptyTitle(InvalidTitle):
    pass


@dataclass
class Post:
    title: str
    body: bytes = b''

    @property
    def text(self):
        return self.body.decode('utf-8', errors='replace')


def check_title(title):
    """Reject titles that could escape the posts directory or alias another post"""
    if not title:
        raise EmptyTitle('Missing post title')
    if title.startswith('.') or any(c in title for c in ('/', '\\', '\x00')):
        raise InvalidTitle('Invalid post title')
    return title


class PostStore:
    def __init__(self, directory=POSTS_DIR):
        self.directory = directory

    def path_for(self, title):
        return os.path.join(self.directory, check_title(title) + POST_EXTENSION)

    def load(self, title):
        path = self.path_for(title)
        try:
            with open(path, 'rb') as f:
                body = f.read()
        except FileNotFoundError:
            logging.warning(f"Post not found: {title}")
            raise PostNotFound(f"Post not found: {title}")
        except OSError as e:
            logging.error(f"Failed to read post {title}: {e}")
            raise ReadError(e.strerror or 'Read error')

        return Post(title=title, body=body)

    def save(self, post):
        path = self.path_for(post.title)

        if not os.path.isdir(self.directory):
            logging.error(f"Posts directory does not exist: {self.directory}")
            raise StorageUnavailable('Resource missing')

        # Write to a sibling temp file so a failed save never replaces the post
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix='.', suffix='.tmp', dir=self.directory)
            with os.fdopen(fd, 'wb') as f:
                f.write(post.body)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, POST_FILE_MODE)
            os.replace(tmp_path, path)
        except OSError as e:
            logging.error(f"Failed to save post {post.title}: {e}")
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise WriteError(e.strerror or 'Write error')

        logging.info(f"Saved post {post.title} ({len(post.body)} bytes)")


def load(title, directory=POSTS_DIR):
    return PostStore(directory).load(title)


def save(post, directory=POSTS_DIR):
    PostStore(directory).save(post)

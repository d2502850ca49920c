import pytest

from wikipost.app import create_app


@pytest.fixture
def posts_dir(tmp_path):
    directory = tmp_path / 'posts'
    directory.mkdir()
    return directory


@pytest.fixture
def app(posts_dir):
    return create_app({'TESTING': True, 'POSTS_DIR': str(posts_dir)})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions['posts']

import pytest
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

# Add the parent directory to sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import ProfileContext
from utils.database import SQLiteStore

@pytest.fixture
def test_store():
    """SQLite store on a temporary file"""
    fd, temp_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    store = SQLiteStore(temp_path)
    store.init_db()

    yield store

    os.unlink(temp_path)

@pytest.fixture
def mock_store():
    """Store double with no existing consultations"""
    mock = MagicMock()
    mock.find.return_value = []
    mock.insert.side_effect = lambda collection, record: {
        'id': 'consult-1',
        'created_at': '2024-01-01T00:00:00+00:00',
        'updated_at': '2024-01-01T00:00:00+00:00',
        **record,
    }
    mock.count.return_value = 0
    return mock

@pytest.fixture
def test_profile():
    """Signed-in user"""
    return ProfileContext(id='user-123', email='jane@example.com', full_name='Jane Doe')

@pytest.fixture
def profile_headers(test_profile):
    return {
        'X-Profile-Id': test_profile.id,
        'X-Profile-Email': test_profile.email,
        'X-Profile-Name': test_profile.full_name,
    }

@pytest.fixture
def app(test_store):
    from app_factory import create_app
    app = create_app('testing', store=test_store)
    return app

@pytest.fixture
def client(app):
    """Create a test client"""
    with app.test_client() as client:
        yield client

import pytest
from pathlib import Path
import tempfile
import shutil
from time_on_task.services.database import DatabaseManager
from time_on_task.models.student_event import StudentEvent

def make_event(action, client_time, user_id=1, class_id=10, task_id="t"):
    """Build an event the way the store returns it"""
    return StudentEvent(
        user_id=user_id,
        class_id=class_id,
        task_id=task_id,
        action=action,
        client_time=client_time
    )

@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)

@pytest.fixture
def db():
    """Provide a test database instance"""
    db = DatabaseManager(":memory:")  # Use in-memory database for testing
    yield db
    db.close()

@pytest.fixture
def sample_events():
    """Two students in two classes, both pause styles recorded"""
    return [
        make_event("started", 100.0, user_id=1, class_id=10, task_id="a"),
        make_event("started", 100.0, user_id=2, class_id=20, task_id="a"),
        make_event("paused", 110.0, user_id=1, class_id=10, task_id="a"),
        make_event("application-paused", 110.0, user_id=1, class_id=10, task_id="a"),
        make_event("unpaused", 115.0, user_id=1, class_id=10, task_id="a"),
        make_event("application-unpaused", 120.0, user_id=1, class_id=10, task_id="a"),
        make_event("finished", 130.0, user_id=1, class_id=10, task_id="a"),
        make_event("finished", 160.0, user_id=2, class_id=20, task_id="a"),
    ]

@pytest.fixture
def populated_db(db, sample_events):
    """In-memory database holding the sample events"""
    db.store_events(sample_events)
    return db

import pytest
from pydantic import ValidationError
from time_on_task.config.config import (
    ActionKind,
    ActionLabels,
    AggregationProfile,
    APPLICATION_ACTIONS,
    CLASS_PROFILE,
    COMBINED_STUDENT_PROFILE,
    STUDENT_PROFILE
)
from time_on_task.config.settings import Settings

def test_student_profile():
    """Test the per-student report rules"""
    assert STUDENT_PROFILE.id_field == "user_id"
    assert STUDENT_PROFILE.output_key == "userId"
    assert STUDENT_PROFILE.max_session_span is None
    assert sorted(STUDENT_PROFILE.actions.whitelist) == ["finished", "paused", "started", "unpaused"]

def test_class_and_combined_profiles():
    """Test that the class and combined reports share the application labels and cap"""
    expected = ["application-paused", "application-unpaused", "finished", "started"]
    for profile in (CLASS_PROFILE, COMBINED_STUDENT_PROFILE):
        assert profile.max_session_span == 3600.0
        assert profile.output_key == "id"
        assert sorted(profile.actions.whitelist) == expected
    assert CLASS_PROFILE.id_field == "class_id"
    assert COMBINED_STUDENT_PROFILE.id_field == "user_id"

def test_kind_of():
    assert APPLICATION_ACTIONS.kind_of("application-paused") is ActionKind.PAUSED
    assert APPLICATION_ACTIONS.kind_of("finished") is ActionKind.FINISHED
    assert APPLICATION_ACTIONS.kind_of("paused") is None

def test_custom_profile():
    """Test injecting labels and a span cap for a dimension"""
    profile = AggregationProfile(
        name="custom",
        id_field="class_id",
        actions=ActionLabels(paused="hold", unpaused="resume"),
        max_session_span=14400
    )
    assert profile.actions.kind_of("resume") is ActionKind.UNPAUSED
    assert profile.max_session_span == 14400.0

@pytest.mark.parametrize("fields", [
    {"name": "bad", "id_field": "task_id"},
    {"name": "bad", "id_field": "user_id", "max_session_span": 0},
])
def test_invalid_profile(fields):
    with pytest.raises(ValidationError):
        AggregationProfile(**fields)

def test_settings_from_environment(monkeypatch):
    """Test reading connection parameters from the environment"""
    monkeypatch.setenv("DB_NAME", "school.db")
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_DIALECT", "sqlite")

    settings = Settings()

    assert settings.DB_NAME == "school.db"
    assert settings.DB_HOST == "db.internal"
    assert settings.log_file.name == "time_on_task.log"

"""Unit tests for the exception hierarchy (habitquest/exceptions.py)"""
import logging

from habitquest.exceptions import (
    ConfigurationError,
    HabitQuestError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)


def test_base_error_to_dict():
    error = HabitQuestError("Something broke", user_id="user-1", operation="save", context={"k": "v"})

    data = error.to_dict()

    assert data["error"] == "HabitQuestError"
    assert data["message"] == "Something broke"
    assert data["operation"] == "save"
    assert data["context"] == {"k": "v"}
    assert "timestamp" in data
    assert str(error) == "Something broke"


def test_errors_log_on_creation(caplog):
    with caplog.at_level(logging.ERROR, logger="habitquest.exceptions"):
        StorageWriteError("disk full", namespace="todo-storage")

    assert "StorageWriteError: disk full" in caplog.text


def test_storage_errors_carry_namespace_and_operation():
    cause = OSError("permission denied")

    read_error = StorageReadError("cannot read", namespace="xp-storage", context={"path": "/tmp/x"}, cause=cause)
    write_error = StorageWriteError("cannot write", namespace="xp-storage")

    assert isinstance(read_error, StorageError)
    assert read_error.operation == "load"
    assert read_error.context == {"path": "/tmp/x", "namespace": "xp-storage"}
    assert read_error.cause is cause
    assert write_error.operation == "save"
    assert write_error.namespace == "xp-storage"


def test_configuration_error():
    error = ConfigurationError("Unknown backend", config_key="STORAGE_BACKEND")

    assert isinstance(error, HabitQuestError)
    assert error.config_key == "STORAGE_BACKEND"
    assert error.to_dict()["context"] == {"config_key": "STORAGE_BACKEND"}

"""
Exception hierarchy for habitquest

Store operations do not raise for unknown ids; these exceptions are used at
the persistence boundary (where they are caught and degraded) and for
configuration problems.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class HabitQuestError(Exception):
    """
    Base exception for all habitquest errors

    Provides:
    - Automatic timestamping
    - Structured context
    - Automatic logging

    Example:
        raise HabitQuestError(
            message="Failed to save store state",
            user_id="user-1",
            operation="save",
            context={"namespace": "xp-storage"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # 'message' is reserved by logging
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for callers that report errors"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "operation": self.operation,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


# ==========================================
# Storage Errors
# ==========================================

class StorageError(HabitQuestError):
    """
    Base class for persistence failures

    Raised by storage backends and caught by PersistentStore, which keeps
    the in-memory state and stops writing for the rest of the session.
    """

    def __init__(self, message: str, namespace: Optional[str] = None, **kwargs):
        self.namespace = namespace
        context = kwargs.pop("context", None) or {}
        context["namespace"] = namespace
        super().__init__(message=message, context=context, **kwargs)


class StorageReadError(StorageError):
    """Persisted state could not be read or decoded"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, operation="load", **kwargs)


class StorageWriteError(StorageError):
    """Store state could not be serialized or written"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, operation="save", **kwargs)


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(HabitQuestError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            context={"config_key": config_key},
            **kwargs
        )

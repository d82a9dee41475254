"""Domain-level exceptions shared by search and recommendations."""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base class for user discovery errors."""

    reason: str = "unknown"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.reason)
        if reason:
            self.reason = reason


class NotFound(DiscoveryError):
    reason = "not_found"


class UserNotFound(NotFound):
    reason = "user_not_found"

    def __init__(self, user_id: str) -> None:
        super().__init__()
        self.user_id = user_id

    def __str__(self) -> str:
        return f"{self.reason}: {self.user_id}"


class DependencyUnavailable(DiscoveryError):
    """Raised when a collaborating store cannot serve a read."""

    reason = "dependency_unavailable"

    def __init__(self, dependency: str, reason: str | None = None) -> None:
        super().__init__(reason)
        self.dependency = dependency

    def __str__(self) -> str:
        return f"{self.reason}: {self.dependency}"


class InvalidArgument(DiscoveryError):
    reason = "invalid_argument"

"""Social domain exports."""

from .exceptions import DependencyUnavailable, DiscoveryError, InvalidArgument, NotFound, UserNotFound  # noqa: F401
from .memory import InMemorySocialStore  # noqa: F401
from .models import GeoPoint, PendingRelationship, Post, SimpleUser, User  # noqa: F401
from .repositories import FriendGraph, PostStore, RelationshipStore, UserStore  # noqa: F401

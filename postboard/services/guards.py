"""Authorization guards shared by every mutating operation."""
import logging
import uuid

from postboard.errors import Forbidden, Unauthenticated
from postboard.models import User

logger = logging.getLogger(__name__)


def require_identity(identity: User | None) -> User:
    """Return *identity*, or raise ``Unauthenticated`` for anonymous callers."""
    if identity is None:
        raise Unauthenticated()
    return identity


def assert_owner(identity: User, owner_id: uuid.UUID, resource: str = "resource") -> None:
    """
    Raise ``Forbidden`` unless *identity* owns the resource.

    Ownership compares user identifiers only; usernames and display names
    are never trusted for this.
    """
    if identity.id != owner_id:
        logger.info("Refused %s mutation: user %s is not owner %s", resource, identity.id, owner_id)
        raise Forbidden(f"You do not own this {resource}")

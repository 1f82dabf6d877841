# Repositories package — the entity store.
#
# One module per entity, each exposing async functions that take an
# AsyncSession as their first argument:
#
#   user_repository     — users, lookup by username
#   post_repository     — posts, partial update, cascading delete
#   comment_repository  — comments, ordered by creation time
#   like_repository     — likes, unique per (post, user), grouped counts
#
# Repositories assign identifiers and timestamps, flush but never commit,
# and translate uniqueness violations into ``ConstraintViolation``.
# Ownership is not their concern; that lives in ``postboard.services``.
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware creation / modification timestamp."""
    return datetime.now(timezone.utc)

# Services package — the content service.
#
# Each module exposes a focused set of async functions that turn an
# identity (a User, or None for anonymous callers) plus validated arguments
# into a consistent read or mutation:
#
#   post_service     — create / read / partial update / delete posts
#   comment_service  — create / list / delete comments
#   like_service     — idempotent like / unlike, like counts, viewer flag
#   aggregation      — post views combining fields, like aggregates, comments
#   user_service     — registration, credential check, public profile
#   guards           — require_identity / assert_owner shared by mutations
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  Failures are raised as ``postboard.errors``
# exceptions.

from django.contrib.auth import get_user_model

# Canonical role names
ROLE_OWNER = "owner"
ROLE_CUSTOMER = "customer"

ROLES = (ROLE_OWNER, ROLE_CUSTOMER)


def _fetch_user_from_db(user):
    """Fetch a fresh copy of the user from the DB with only the fields we need.

    Returns None if user is not authenticated.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    User = get_user_model()
    # Only load minimal fields required for RBAC checks
    return User.objects.only("id", "role").filter(pk=getattr(user, "pk", None)).first()


def is_owner(user) -> bool:
    """Store-owner check, verified against the database."""
    db_user = _fetch_user_from_db(user)
    return getattr(db_user, "role", None) == ROLE_OWNER if db_user else False


def is_customer(user) -> bool:
    db_user = _fetch_user_from_db(user)
    return getattr(db_user, "role", None) == ROLE_CUSTOMER if db_user else False

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from .errors import BadRequest
from .serializers import normalize_email

ALLOWED_USER_ROLES = {"customer", "seller", "admin"}
DEFAULT_ROLE = "customer"
REQUESTED = "Requested"


def save_user(store, email: str, profile: Optional[Dict]):
    """Insert a customer on first login; return ``(document, inserted)``.

    A known email gets its stored document back untouched.
    """
    email = normalize_email(email)
    if not email:
        raise BadRequest("An email address is required.")

    existing = store.users.find_one({"email": email})
    if existing:
        return existing, False

    document = dict(profile or {})
    document.pop("_id", None)
    document.pop("status", None)
    document.update(
        {
            "email": email,
            "role": DEFAULT_ROLE,
            "createdAt": datetime.now(timezone.utc),
        }
    )
    try:
        result = store.users.insert_one(document)
    except DuplicateKeyError:
        return store.users.find_one({"email": email}), False
    return result, True


def request_role_change(store, email: str):
    email = normalize_email(email)
    user = store.users.find_one({"email": email})
    if not user or user.get("status") == REQUESTED:
        raise BadRequest("You have already requested, wait for some time.")
    return store.users.update_one({"email": email}, {"$set": {"status": REQUESTED}})


def list_users_except(store, email: str) -> List[Dict]:
    return list(store.users.find({"email": {"$ne": normalize_email(email)}}))


def set_role(store, email: str, role) -> object:
    desired_role = str(role or "").strip().lower()
    if desired_role not in ALLOWED_USER_ROLES:
        raise BadRequest("Role must be 'customer', 'seller', or 'admin'.")
    return store.users.update_one(
        {"email": normalize_email(email)},
        {"$set": {"role": desired_role, "status": REQUESTED}},
    )


def user_role(store, email: str) -> Optional[str]:
    user = store.users.find_one({"email": normalize_email(email)}, {"role": 1})
    return user.get("role") if user else None

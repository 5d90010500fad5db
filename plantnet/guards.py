"""Request guards.

A guard takes the result of the guards before it and returns either
``Allowed`` or ``Denied``. Routes list their guards explicitly::

    @guarded(authenticated, has_role(store, "admin"))
    def admin_stat():
        ...

Role checks always read the user document again, so a role change applies
on the very next request.
"""
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional, Union

from flask import g, jsonify

from .errors import Unauthenticated
from .tokens import verify_session


@dataclass(frozen=True)
class Allowed:
    email: Optional[str] = None


@dataclass(frozen=True)
class Denied:
    status: int
    reason: str


AuthResult = Union[Allowed, Denied]
Guard = Callable[[Allowed], AuthResult]


def authenticated(context: Allowed) -> AuthResult:
    try:
        email = verify_session()
    except Unauthenticated as exc:
        return Denied(401, exc.message)
    return Allowed(email=email)


def has_role(store, role: str) -> Guard:
    label = role.capitalize()

    def guard(context: Allowed) -> AuthResult:
        if not context.email:
            return Denied(401, "unauthorized access")

        user = store.users.find_one({"email": context.email})
        if not user or user.get("role") != role:
            return Denied(403, f"Forbidden Access! {label} only Action!")
        return context

    guard.__name__ = f"has_role_{role}"
    return guard


def check(*guards: Guard) -> AuthResult:
    result = Allowed()
    for guard in guards:
        result = guard(result)
        if isinstance(result, Denied):
            return result
    return result


def guarded(*guards: Guard):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            result = check(*guards)
            if isinstance(result, Denied):
                return jsonify({"message": result.reason}), result.status
            g.auth = result
            return view(*args, **kwargs)

        return wrapper

    return decorator

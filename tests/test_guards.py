from plantnet.guards import Allowed, Denied, check, has_role


def test_check_stops_at_first_denial():
    calls = []

    def first(context):
        calls.append("first")
        return Denied(401, "nope")

    def second(context):
        calls.append("second")
        return Allowed(email="a@x.com")

    assert check(first, second) == Denied(401, "nope")
    assert calls == ["first"]


def test_check_threads_context_through_guards():
    def sign_in(context):
        return Allowed(email="a@x.com")

    def needs_email(context):
        return context if context.email else Denied(401, "missing")

    assert check(sign_in, needs_email) == Allowed(email="a@x.com")


def test_check_without_guards_allows():
    assert check() == Allowed()


def test_has_role_requires_an_identity(store):
    guard = has_role(store, "admin")

    assert guard(Allowed()) == Denied(401, "unauthorized access")


def test_has_role_rejects_unknown_user(store):
    guard = has_role(store, "admin")

    result = guard(Allowed(email="ghost@x.com"))

    assert isinstance(result, Denied)
    assert result.status == 403


def test_has_role_passes_matching_user_through(store, add_user):
    add_user("boss@x.com", role="admin")

    result = has_role(store, "admin")(Allowed(email="boss@x.com"))

    assert result == Allowed(email="boss@x.com")


def test_admin_route_forbidden_for_customer(client, add_user, login):
    add_user("a@x.com", role="customer")
    login("a@x.com")

    response = client.get("/admin-stat")

    assert response.status_code == 403
    assert response.get_json() == {"message": "Forbidden Access! Admin only Action!"}


def test_admin_route_forbidden_for_seller(client, add_user, login):
    add_user("s@x.com", role="seller")
    login("s@x.com")

    assert client.get("/all-users/s@x.com").status_code == 403
    assert client.patch("/user/role/a@x.com", json={"role": "admin"}).status_code == 403


def test_admin_route_without_session_is_unauthorized(client):
    assert client.get("/admin-stat").status_code == 401


def test_seller_route_forbidden_for_admin(client, add_user, login):
    add_user("boss@x.com", role="admin")
    login("boss@x.com")

    response = client.get("/plants/seller")

    assert response.status_code == 403
    assert response.get_json() == {"message": "Forbidden Access! Seller only Action!"}


def test_role_change_applies_on_next_request(client, store, add_user, login):
    add_user("a@x.com", role="customer")
    login("a@x.com")
    assert client.get("/admin-stat").status_code == 403

    store.users.update_one({"email": "a@x.com"}, {"$set": {"role": "admin"}})

    assert client.get("/admin-stat").status_code == 200

    store.users.update_one({"email": "a@x.com"}, {"$set": {"role": "customer"}})

    assert client.get("/admin-stat").status_code == 403

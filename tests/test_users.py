def test_save_user_is_upsert_if_absent(client, store):
    first = client.post("/users/a@x.com", json={"name": "A"})

    assert first.status_code == 200
    body = first.get_json()
    assert body["acknowledged"] is True
    assert body["insertedId"]

    stored = store.users.find_one({"email": "a@x.com"})
    assert stored["role"] == "customer"
    assert stored["name"] == "A"
    assert "createdAt" in stored

    second = client.post("/users/a@x.com", json={"name": "Someone Else", "role": "admin"})

    assert second.status_code == 200
    existing = second.get_json()
    assert existing["_id"] == body["insertedId"]
    assert existing["name"] == "A"
    assert existing["role"] == "customer"
    assert store.users.count_documents({"email": "a@x.com"}) == 1


def test_save_user_ignores_role_in_body(client, store):
    client.post("/users/new@x.com", json={"name": "N", "role": "admin"})

    assert store.users.find_one({"email": "new@x.com"})["role"] == "customer"


def test_save_user_keeps_existing_role(client, add_user):
    add_user("s@x.com", role="seller")

    response = client.post("/users/s@x.com", json={"name": "S"})

    assert response.get_json()["role"] == "seller"


def test_get_user_role(client, add_user):
    add_user("s@x.com", role="seller")

    assert client.get("/users/role/s@x.com").get_json() == {"role": "seller"}
    assert client.get("/users/role/nobody@x.com").get_json() == {"role": None}


def test_request_role_change(client, store, add_user, login):
    add_user("a@x.com")
    login("a@x.com")

    response = client.patch("/users/a@x.com")

    assert response.status_code == 200
    assert response.get_json()["modifiedCount"] == 1
    assert store.users.find_one({"email": "a@x.com"})["status"] == "Requested"


def test_request_role_change_twice_is_rejected(client, add_user, login):
    add_user("a@x.com", status="Requested")
    login("a@x.com")

    response = client.patch("/users/a@x.com")

    assert response.status_code == 400


def test_request_role_change_for_unknown_user(client, login):
    login("ghost@x.com")

    assert client.patch("/users/ghost@x.com").status_code == 400


def test_admin_lists_everyone_but_the_caller(client, add_user, login):
    add_user("boss@x.com", role="admin")
    add_user("a@x.com")
    add_user("s@x.com", role="seller")
    login("boss@x.com")

    response = client.get("/all-users/boss@x.com")

    assert response.status_code == 200
    emails = sorted(user["email"] for user in response.get_json())
    assert emails == ["a@x.com", "s@x.com"]


def test_admin_sets_role_and_status(client, store, add_user, login):
    add_user("boss@x.com", role="admin")
    add_user("a@x.com", status="Requested")
    login("boss@x.com")

    response = client.patch("/user/role/a@x.com", json={"role": "seller"})

    assert response.status_code == 200
    assert response.get_json()["modifiedCount"] == 1
    updated = store.users.find_one({"email": "a@x.com"})
    assert updated["role"] == "seller"
    assert updated["status"] == "Requested"


def test_admin_cannot_set_unknown_role(client, store, add_user, login):
    add_user("boss@x.com", role="admin")
    add_user("a@x.com")
    login("boss@x.com")

    response = client.patch("/user/role/a@x.com", json={"role": "overlord"})

    assert response.status_code == 400
    assert store.users.find_one({"email": "a@x.com"})["role"] == "customer"

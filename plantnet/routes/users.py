from flask import g, jsonify, request

from .. import users
from ..guards import authenticated, guarded, has_role
from ..serializers import serialize_document, serialize_insert, serialize_update


def register_user_routes(app, services):
    store = services.store

    @app.route("/users/<email>", methods=["POST"])
    def save_user(email: str):
        payload = request.get_json(silent=True) or {}
        outcome, inserted = users.save_user(store, email, payload)
        if inserted:
            app.logger.info("Created customer account for %s", email)
            return jsonify(serialize_insert(outcome))
        return jsonify(serialize_document(outcome))

    @app.route("/users/<email>", methods=["PATCH"])
    @guarded(authenticated)
    def request_role_change(email: str):
        result = users.request_role_change(store, email)
        app.logger.info("%s requested a role change for %s", g.auth.email, email)
        return jsonify(serialize_update(result))

    @app.route("/users/role/<email>", methods=["GET"])
    def get_user_role(email: str):
        return jsonify({"role": users.user_role(store, email)})

    @app.route("/all-users/<email>", methods=["GET"])
    @guarded(authenticated, has_role(store, "admin"))
    def list_users(email: str):
        return jsonify(
            [serialize_document(user) for user in users.list_users_except(store, email)]
        )

    @app.route("/user/role/<email>", methods=["PATCH"])
    @guarded(authenticated, has_role(store, "admin"))
    def update_user_role(email: str):
        payload = request.get_json(silent=True) or {}
        result = users.set_role(store, email, payload.get("role"))
        app.logger.info(
            "%s set the role of %s to %s", g.auth.email, email, payload.get("role")
        )
        return jsonify(serialize_update(result))

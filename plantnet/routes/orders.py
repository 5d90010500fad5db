from flask import g, jsonify, request

from .. import orders
from ..guards import authenticated, guarded, has_role
from ..serializers import (
    serialize_delete,
    serialize_document,
    serialize_insert,
    serialize_update,
)


def register_order_routes(app, services):
    store = services.store
    seller_only = guarded(authenticated, has_role(store, "seller"))

    @app.route("/order", methods=["POST"])
    @guarded(authenticated)
    def create_order():
        payload = request.get_json(silent=True) or {}
        result = orders.create_order(store, services.notifier, payload)
        app.logger.info("%s placed order %s", g.auth.email, result.inserted_id)
        return jsonify(serialize_insert(result))

    @app.route("/customer-orders/<email>", methods=["GET"])
    @guarded(authenticated)
    def list_customer_orders(email: str):
        return jsonify(
            [serialize_document(order) for order in orders.customer_orders(store, email)]
        )

    @app.route("/seller-orders/<email>", methods=["GET"])
    @seller_only
    def list_seller_orders(email: str):
        return jsonify(
            [serialize_document(order) for order in orders.seller_orders(store, email)]
        )

    @app.route("/orders/<order_id>", methods=["PATCH"])
    @seller_only
    def update_order_status(order_id: str):
        payload = request.get_json(silent=True) or {}
        result = orders.set_status(store, order_id, payload.get("status"))
        app.logger.info(
            "%s set order %s to %s", g.auth.email, order_id, payload.get("status")
        )
        return jsonify(serialize_update(result))

    @app.route("/orders/<order_id>", methods=["DELETE"])
    @guarded(authenticated)
    def cancel_order(order_id: str):
        result = orders.cancel_order(store, order_id)
        app.logger.info("%s cancelled order %s", g.auth.email, order_id)
        return jsonify(serialize_delete(result))

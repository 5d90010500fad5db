from flask import g, jsonify, request

from .. import inventory, plants
from ..errors import BadRequest
from ..guards import authenticated, guarded, has_role
from ..serializers import (
    safe_int,
    serialize_delete,
    serialize_document,
    serialize_insert,
    serialize_update,
)


def register_plant_routes(app, services):
    store = services.store
    seller_only = guarded(authenticated, has_role(store, "seller"))

    @app.route("/plants", methods=["POST"])
    @seller_only
    def create_plant():
        payload = request.get_json(silent=True) or {}
        result = plants.create_plant(store, payload, g.auth.email)
        app.logger.info("%s listed plant %s", g.auth.email, result.inserted_id)
        return jsonify(serialize_insert(result))

    @app.route("/plants", methods=["GET"])
    def list_plants():
        return jsonify([serialize_document(plant) for plant in plants.list_plants(store)])

    @app.route("/plants/seller", methods=["GET"])
    @seller_only
    def list_seller_plants():
        return jsonify(
            [
                serialize_document(plant)
                for plant in plants.seller_plants(store, g.auth.email)
            ]
        )

    @app.route("/plants/<plant_id>", methods=["GET"])
    def get_plant(plant_id: str):
        return jsonify(serialize_document(plants.fetch_plant(store, plant_id)))

    @app.route("/plants/<plant_id>", methods=["DELETE"])
    @seller_only
    def delete_plant(plant_id: str):
        result = plants.delete_plant(store, plant_id, g.auth.email)
        app.logger.info("%s removed plant %s", g.auth.email, plant_id)
        return jsonify(serialize_delete(result))

    @app.route("/plants/quantity/<plant_id>", methods=["PATCH"])
    @guarded(authenticated)
    def update_plant_quantity(plant_id: str):
        payload = request.get_json(silent=True) or {}
        amount = safe_int(payload.get("quantityToUpdate"))
        if amount is None:
            raise BadRequest("quantityToUpdate must be a whole number.")

        result = inventory.adjust(store, plant_id, amount, payload.get("status"))
        return jsonify(serialize_update(result))

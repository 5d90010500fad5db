from flask import jsonify, request

from .. import plants
from ..errors import BadRequest
from ..guards import authenticated, guarded
from ..payments import to_minor_units
from ..serializers import safe_float, safe_int


def register_payment_routes(app, services):
    store = services.store

    @app.route("/create-payment-intent", methods=["POST"])
    @guarded(authenticated)
    def create_payment_intent():
        payload = request.get_json(silent=True) or {}
        quantity = safe_int(payload.get("quantity"))
        if quantity is None or quantity < 1:
            raise BadRequest("Quantity must be a positive whole number.")

        plant = plants.fetch_plant(store, payload.get("plantId"))
        unit_price = safe_float(plant.get("price"), 0.0)
        amount = to_minor_units(quantity, unit_price)

        client_secret = services.payments.create_payment_intent(amount)
        return jsonify({"clientSecret": client_secret})

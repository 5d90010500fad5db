"""Order lifecycle: checkout, status changes, cancellation and listings.

Creating an order does not touch plant stock; the client adjusts inventory
with a separate request. The two writes are not atomic, so a failure in
between leaves the stock count stale.
"""
from datetime import datetime, timezone
from typing import Dict, List

from .errors import BadRequest, Conflict, NotFound
from .serializers import normalize_email, parse_object_id, safe_float, safe_int

DEFAULT_STATUS = "Pending"
DELIVERED = "Delivered"

CUSTOMER_SUBJECT = "Order successful."
SELLER_SUBJECT = "Hurray!, You have an order to process."


def _normalize_customer(raw) -> Dict:
    if not isinstance(raw, dict):
        raise BadRequest("Customer details are required.")
    customer = dict(raw)
    customer["email"] = normalize_email(raw.get("email"))
    if not customer["email"]:
        raise BadRequest("Customer email is required.")
    return customer


def create_order(store, notifier, payload: Dict):
    plant_id = parse_object_id(payload.get("plantId"), "plant")
    if not store.plants.find_one({"_id": plant_id}, {"_id": 1}):
        raise NotFound("Plant Not Found")

    quantity = safe_int(payload.get("quantity"))
    if quantity is None or quantity < 1:
        raise BadRequest("Quantity must be a positive whole number.")

    price = safe_float(payload.get("price"))
    if price is None or price < 0:
        raise BadRequest("Price must be a valid number.")

    customer = _normalize_customer(payload.get("customer"))
    seller = normalize_email(payload.get("seller"))

    status = payload.get("status")
    if not isinstance(status, str) or not status.strip():
        status = DEFAULT_STATUS

    document = {key: value for key, value in payload.items() if key != "_id"}
    document.update(
        {
            "customer": customer,
            "seller": seller,
            "plantId": plant_id,
            "quantity": quantity,
            "price": price,
            "status": status,
            "createdAt": datetime.now(timezone.utc),
        }
    )
    result = store.orders.insert_one(document)

    notifier.submit(
        customer["email"],
        CUSTOMER_SUBJECT,
        f"You've placed an order successfully. Transaction id: {result.inserted_id}",
    )
    notifier.submit(
        seller,
        SELLER_SUBJECT,
        f"Get the plants ready for {customer.get('name') or customer['email']}",
    )
    return result


def set_status(store, order_id, status):
    if not isinstance(status, str):
        raise BadRequest("Status must be a string.")
    object_id = parse_object_id(order_id, "order")
    return store.orders.update_one({"_id": object_id}, {"$set": {"status": status}})


def cancel_order(store, order_id):
    object_id = parse_object_id(order_id, "order")
    order = store.orders.find_one({"_id": object_id})
    if not order:
        raise NotFound("Order not found.")
    if order.get("status") == DELIVERED:
        raise Conflict("Cannot cancel once the product is delivered")
    return store.orders.delete_one({"_id": object_id})


def enriched_orders_pipeline(match: Dict, joined_fields: Dict[str, str]) -> List[Dict]:
    return [
        {"$match": match},
        {
            "$lookup": {
                "from": "plants",
                "localField": "plantId",
                "foreignField": "_id",
                "as": "plants",
            }
        },
        {"$unwind": {"path": "$plants", "preserveNullAndEmptyArrays": True}},
        {
            "$addFields": {
                field: f"$plants.{source}" for field, source in joined_fields.items()
            }
        },
        {"$project": {"plants": 0}},
    ]


def customer_orders(store, email: str) -> List[Dict]:
    pipeline = enriched_orders_pipeline(
        {"customer.email": normalize_email(email)},
        {"name": "name", "image": "image", "category": "category"},
    )
    return list(store.orders.aggregate(pipeline))


def seller_orders(store, email: str) -> List[Dict]:
    pipeline = enriched_orders_pipeline(
        {"seller": normalize_email(email)},
        {"name": "name"},
    )
    return list(store.orders.aggregate(pipeline))

from typing import Dict, List

from .errors import BadRequest, Forbidden, NotFound
from .serializers import normalize_email, parse_object_id, safe_float, safe_int


def normalize_plant_payload(payload: Dict, seller_email: str) -> Dict:
    name = str(payload.get("name") or "").strip()
    if not name:
        raise BadRequest("A plant name is required.")

    price = safe_float(payload.get("price"))
    if price is None or price < 0:
        raise BadRequest("Price must be a valid number.")

    raw_quantity = payload.get("quantity")
    quantity = 0 if raw_quantity in (None, "") else safe_int(raw_quantity)
    if quantity is None or quantity < 0:
        raise BadRequest("Quantity must be a whole number of zero or more.")

    raw_seller = payload.get("seller")
    seller = dict(raw_seller) if isinstance(raw_seller, dict) else {}
    seller["email"] = seller_email

    document = {key: value for key, value in payload.items() if key != "_id"}
    document.update(
        {
            "name": name,
            "category": str(payload.get("category") or "").strip(),
            "price": price,
            "quantity": quantity,
            "image": str(payload.get("image") or "").strip(),
            "seller": seller,
        }
    )
    return document


def create_plant(store, payload: Dict, seller_email: str):
    document = normalize_plant_payload(payload, normalize_email(seller_email))
    return store.plants.insert_one(document)


def list_plants(store) -> List[Dict]:
    return list(store.plants.find())


def seller_plants(store, seller_email: str) -> List[Dict]:
    return list(store.plants.find({"seller.email": normalize_email(seller_email)}))


def fetch_plant(store, plant_id) -> Dict:
    object_id = parse_object_id(plant_id, "plant")
    plant = store.plants.find_one({"_id": object_id})
    if not plant:
        raise NotFound("Plant Not Found")
    return plant


def delete_plant(store, plant_id, seller_email: str):
    plant = fetch_plant(store, plant_id)
    owner_email = normalize_email((plant.get("seller") or {}).get("email"))
    if owner_email != normalize_email(seller_email):
        raise Forbidden("You do not have permission to delete this plant.")
    return store.plants.delete_one({"_id": plant["_id"]})

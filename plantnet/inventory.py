from .serializers import parse_object_id

INCREASE = "increase"


def signed_delta(amount: int, direction) -> int:
    """Anything other than ``"increase"`` (including no direction) subtracts."""
    return amount if direction == INCREASE else -amount


def adjust(store, plant_id, amount: int, direction=None):
    """Shift a plant's stock by ``amount`` with one atomic ``$inc``.

    Stock is not floored at zero, and an unknown plant simply matches nothing.
    """
    object_id = parse_object_id(plant_id, "plant")
    return store.plants.update_one(
        {"_id": object_id},
        {"$inc": {"quantity": signed_delta(amount, direction)}},
    )

"""Admin dashboard statistics.

Totals and the daily chart are two separate aggregation passes, so they can
disagree slightly if orders are written between them.
"""
from typing import Dict, List

DAY_FORMAT = "%Y-%m-%d"

TOTALS_PIPELINE = [
    {
        "$group": {
            "_id": None,
            "totalRevenue": {"$sum": "$price"},
            "totalOrder": {"$sum": 1},
        }
    },
    {"$project": {"_id": 0}},
]

DAILY_PIPELINE = [
    {"$match": {"createdAt": {"$exists": True, "$ne": None}}},
    {
        "$group": {
            "_id": {"$dateToString": {"format": DAY_FORMAT, "date": "$createdAt"}},
            "quantity": {"$sum": "$quantity"},
            "price": {"$sum": "$price"},
            "order": {"$sum": 1},
        }
    },
    {"$project": {"_id": 0, "date": "$_id", "quantity": 1, "price": 1, "order": 1}},
    {"$sort": {"date": -1}},
]


def order_totals(store) -> Dict:
    for row in store.orders.aggregate(TOTALS_PIPELINE):
        return {
            "totalRevenue": row.get("totalRevenue", 0),
            "totalOrder": row.get("totalOrder", 0),
        }
    return {"totalRevenue": 0, "totalOrder": 0}


def daily_chart(store) -> List[Dict]:
    return list(store.orders.aggregate(DAILY_PIPELINE))


def admin_stats(store) -> Dict:
    stats = {
        "totalUser": store.users.count_documents({}),
        "totalPlants": store.plants.count_documents({}),
    }
    stats.update(order_totals(store))
    stats["chartData"] = daily_chart(store)
    return stats

import logging

from flask_pymongo import PyMongo
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class Store:
    """Handle on the MongoDB database used by every request.

    Built once by the application factory and closed at shutdown. Tests pass
    any pymongo-compatible database object straight to the constructor.
    """

    def __init__(self, database, client=None):
        self.db = database
        self._client = client

    @classmethod
    def connect(cls, app) -> "Store":
        mongo = PyMongo(app)
        return cls(mongo.db, client=mongo.cx)

    @property
    def users(self):
        return self.db.users

    @property
    def plants(self):
        return self.db.plants

    @property
    def orders(self):
        return self.db.orders

    def ensure_indexes(self):
        try:
            self.users.create_index("email", unique=True)
            self.orders.create_index([("createdAt", -1)])
            self.orders.create_index("customer.email")
            self.orders.create_index("seller")
        except PyMongoError as exc:
            logger.warning("Unable to ensure indexes: %s", exc)

    def ping(self) -> bool:
        try:
            self.db.command("ping")
        except PyMongoError as exc:
            logger.error("MongoDB ping failed: %s", exc)
            return False
        logger.info("Pinged your deployment. Connected to MongoDB.")
        return True

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None

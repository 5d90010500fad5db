from .admin import register_admin_routes
from .orders import register_order_routes
from .payments import register_payment_routes
from .plants import register_plant_routes
from .session import register_session_routes
from .users import register_user_routes


def register_routes(app, services):
    register_session_routes(app, services)
    register_user_routes(app, services)
    register_plant_routes(app, services)
    register_order_routes(app, services)
    register_payment_routes(app, services)
    register_admin_routes(app, services)

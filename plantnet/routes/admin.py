from flask import jsonify

from .. import reporting
from ..guards import authenticated, guarded, has_role


def register_admin_routes(app, services):
    store = services.store

    @app.route("/admin-stat", methods=["GET"])
    @guarded(authenticated, has_role(store, "admin"))
    def admin_stat():
        return jsonify(reporting.admin_stats(store))

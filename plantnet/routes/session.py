from flask import jsonify, request

from ..errors import BadRequest
from ..serializers import normalize_email
from ..tokens import attach_session, clear_session, issue_token


def register_session_routes(app, services):
    @app.route("/jwt", methods=["POST"])
    def issue_session():
        payload = request.get_json(silent=True) or {}
        email = normalize_email(payload.get("email"))
        if not email:
            raise BadRequest("An email address is required.")

        response = jsonify({"success": True})
        return attach_session(response, issue_token(email))

    @app.route("/logout", methods=["GET"])
    def logout():
        return clear_session(jsonify({"success": True}))

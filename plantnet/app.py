from dataclasses import dataclass
from typing import Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import configure_logging, load_config
from .errors import ApiError
from .notifications import Mailer, Notifier
from .payments import PaymentGateway
from .routes import register_routes
from .store import Store
from .tokens import init_tokens


@dataclass
class Services:
    store: Store
    notifier: Notifier
    payments: PaymentGateway

    def close(self):
        self.notifier.close()
        self.store.close()


def create_app(
    config: Optional[Dict] = None,
    *,
    store: Optional[Store] = None,
    mailer=None,
    payment_gateway=None,
) -> Flask:
    """Create and configure the Flask application.

    ``store``, ``mailer`` and ``payment_gateway`` default to the real MongoDB,
    Resend and Stripe clients built from configuration.
    """
    app = Flask(__name__)
    app.config.update(load_config(config))
    configure_logging(app.config["LOG_LEVEL"])

    trusted_proxy_hops = app.config["TRUSTED_PROXY_HOPS"]
    if trusted_proxy_hops:
        app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_for=trusted_proxy_hops,
            x_proto=trusted_proxy_hops,
            x_host=trusted_proxy_hops,
            x_port=trusted_proxy_hops,
        )

    CORS(
        app,
        supports_credentials=True,
        origins=app.config["CORS_ALLOWED_ORIGINS"] or "*",
    )
    init_tokens(app)

    if store is None:
        store = Store.connect(app)
    store.ensure_indexes()

    if mailer is None:
        mailer = Mailer(app.config["RESEND_API_KEY"], app.config["MAIL_SENDER"])
    if payment_gateway is None:
        payment_gateway = PaymentGateway(
            app.config["PAYMENT_SECRET_KEY"],
            base_url=app.config["PAYMENT_API_BASE"],
            currency=app.config["PAYMENT_CURRENCY"],
        )

    services = Services(
        store=store,
        notifier=Notifier(
            mailer, max_workers=app.config["NOTIFICATION_WORKERS"], log=app.logger
        ),
        payments=payment_gateway,
    )
    app.extensions["plantnet"] = services

    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        return jsonify({"message": exc.message}), exc.status_code

    @app.after_request
    def log_request(response):
        app.logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.route("/")
    def index():
        return "Hello from plantNet Server.."

    @app.route("/health")
    def health():
        return {"status": "ok"}, 200

    register_routes(app, services)
    return app

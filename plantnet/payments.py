import logging

import requests

from .errors import PaymentGatewayError

logger = logging.getLogger(__name__)


def to_minor_units(quantity, unit_price) -> int:
    return int(round(float(quantity) * float(unit_price) * 100))


class PaymentGateway:
    """Creates Stripe payment intents through the REST API."""

    def __init__(self, secret_key: str, base_url: str = "https://api.stripe.com", currency: str = "usd"):
        self.secret_key = (secret_key or "").strip()
        self.base_url = base_url.rstrip("/")
        self.currency = currency

    def create_payment_intent(self, amount: int) -> str:
        if not self.secret_key:
            raise PaymentGatewayError("Payment configuration is incomplete. Please contact support.")

        payload = {
            "amount": amount,
            "currency": self.currency,
            "automatic_payment_methods[enabled]": "true",
        }
        try:
            response = requests.post(
                f"{self.base_url}/v1/payment_intents",
                data=payload,
                headers={"Authorization": f"Bearer {self.secret_key}"},
            )
        except requests.RequestException as exc:
            logger.error("Payment intent request failed: %s", exc)
            raise PaymentGatewayError("Failed to reach the payment provider.") from exc

        if response.status_code != 200:
            logger.error("Payment intent rejected (%s): %s", response.status_code, response.text)
            raise PaymentGatewayError("Failed to create payment intent.")

        client_secret = response.json().get("client_secret")
        if not client_secret:
            logger.error("Payment intent response had no client secret: %s", response.text)
            raise PaymentGatewayError("Failed to create payment intent.")
        return client_secret

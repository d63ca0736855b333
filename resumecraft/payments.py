"""Thin wrapper around the Stripe SDK for one-time plan purchases."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import stripe

from .model import Plan

logger = logging.getLogger(__name__)


class PaymentGateway:
    """Stripe calls with the secret key passed explicitly on every request."""

    def __init__(self, secret_key: str, webhook_secret: str, client_url: str):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret
        self.client_url = client_url.rstrip("/")

    def create_customer(self, email: str, user_id: str) -> str:
        customer = stripe.Customer.create(
            email=email,
            metadata={"userId": user_id},
            api_key=self.secret_key,
        )
        return customer.id

    def create_price(self, plan: Plan) -> str:
        price = stripe.Price.create(
            product=plan.product_id,
            unit_amount=plan.unit_amount,
            currency=plan.currency,
            api_key=self.secret_key,
        )
        return price.id

    def create_checkout_session(self, customer_id: str, price_id: str, user_id: str, plan: Plan) -> str:
        """Create a one-time payment session and return its hosted URL."""
        session = stripe.checkout.Session.create(
            payment_method_types=["card"],
            customer=customer_id,
            line_items=[{"price": price_id, "quantity": 1}],
            mode="payment",
            success_url=f"{self.client_url}/payment/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self.client_url}/payment/cancel",
            metadata={"userId": user_id, "plan": plan.name},
            api_key=self.secret_key,
        )
        logger.info("payment.checkout_created session=%s plan=%s user=%s", session.id, plan.name, user_id)
        return session.url

    def retrieve_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a checkout session as a plain dict, or None when Stripe does not know it."""
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.secret_key)
        except stripe.InvalidRequestError as e:
            if e.http_status == 404:
                logger.info("payment.session_not_found session=%s", session_id)
                return None
            raise
        return session.to_dict()

    def construct_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """Verify the webhook signature and return the event as a plain dict.

        Raises ValueError for an unparseable payload and
        stripe.SignatureVerificationError for a bad signature.
        """
        event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        return event.to_dict()

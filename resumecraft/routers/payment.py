"""Plan checkout, Stripe webhook, payment verification and unsubscribe."""

from __future__ import annotations

import logging
from typing import Optional

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError

from ..auth import get_current_user
from ..config import Settings
from ..deps import get_payments, get_settings, get_store
from ..model import AuthUser, build_plans
from ..payments import PaymentGateway
from ..schemas import ApiResponse, CheckoutIn
from ..store import USERS, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payment", tags=["payment"])


@router.post("/checkout", response_model=ApiResponse, response_model_exclude_unset=True)
def checkout(
    data: CheckoutIn,
    user: AuthUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    payments: PaymentGateway = Depends(get_payments),
):
    plans = build_plans(settings.stripe_products)
    if not isinstance(data.plan, str) or data.plan not in plans:
        raise HTTPException(status_code=400, detail="Invalid subscription plan")
    plan = plans[data.plan]

    try:
        customer_id = payments.create_customer(user.email, user.id)
    except stripe.StripeError:
        logger.exception("Stripe checkout error")
        raise HTTPException(status_code=500, detail="Failed to create checkout session")

    if not plan.product_id:
        raise HTTPException(status_code=404, detail=f"Product ID not found for plan: {plan.name}")

    try:
        price_id = payments.create_price(plan)
        url = payments.create_checkout_session(customer_id, price_id, user.id, plan)
    except stripe.StripeError:
        logger.exception("Stripe checkout error")
        raise HTTPException(status_code=500, detail="Failed to create checkout session")

    return ApiResponse(success=True, data={"url": url})


@router.post("/webhook")
async def webhook(
    request: Request,
    payments: PaymentGateway = Depends(get_payments),
    store: DocumentStore = Depends(get_store),
):
    payload = await request.body()
    signature = request.headers.get("stripe-signature", "")
    try:
        event = payments.construct_event(payload, signature)
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning("Webhook signature verification failed: %s", e)
        raise HTTPException(status_code=400, detail=f"Webhook Error: {e}")

    event_type = event["type"]
    obj = event["data"]["object"]
    if event_type == "checkout.session.completed":
        metadata = obj.get("metadata") or {}
        user_id = metadata.get("userId")
        plan = metadata.get("plan")
        logger.info("Checkout session completed for user %s plan=%s", user_id, plan)
        if user_id and plan:
            try:
                store.update(USERS, user_id, {"subscription": plan})
            except SQLAlchemyError:
                logger.exception("Subscription update error")
                raise HTTPException(status_code=500, detail="Failed to record subscription")
    elif event_type == "payment_intent.succeeded":
        logger.info("Payment succeeded for customer %s", obj.get("customer"))
    else:
        logger.debug("Ignoring webhook event %s", event_type)

    return {"received": True}


@router.get("/verify", response_model=ApiResponse, response_model_exclude_unset=True)
def verify(
    session_id: Optional[str] = None,
    user: AuthUser = Depends(get_current_user),
    payments: PaymentGateway = Depends(get_payments),
):
    if not session_id:
        raise HTTPException(status_code=400, detail="Session ID is required")

    try:
        session = payments.retrieve_session(session_id)
    except stripe.StripeError:
        logger.exception("Payment verification error")
        raise HTTPException(status_code=500, detail="Failed to verify payment")

    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    if session.get("payment_status") == "paid":
        metadata = session.get("metadata") or {}
        return ApiResponse(success=True, data={"paid": True, "plan": metadata.get("plan")})
    return ApiResponse(success=True, data={"paid": False})


@router.post("/unsubscribe", response_model=ApiResponse, response_model_exclude_unset=True)
def unsubscribe(
    user: AuthUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    try:
        store.update(USERS, user.id, {"subscription": "free"})
    except SQLAlchemyError:
        logger.exception("Unsubscribe error")
        raise HTTPException(status_code=500, detail="Failed to cancel subscription")
    return ApiResponse(success=True, message="Subscription cancelled successfully")

# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import get_identity_verifier
from app.data.database import get_db
from app.domain.errors import ShopError
from app.domain.schemas import OrderCreate, OrderOut, OrderDetailOut
from app.services.identity_service import IdentityVerifier
from app.services.order_query_service import OrderQueryService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    identity: IdentityVerifier = Depends(get_identity_verifier),
):
    """
    Składa zamówienie z całego koszyka użytkownika (atomowo).
    """
    try:
        return OrderService(db).place_order(
            identity.resolve(payload.user_id),
            shipping_address=payload.shipping_address,
            payment_method=payload.payment_method,
        )
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[OrderDetailOut])
def list_orders(
    user_id: int | None = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    identity: IdentityVerifier = Depends(get_identity_verifier),
):
    try:
        return OrderQueryService(db).list_user_orders(identity.resolve(user_id))
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user_id: int | None = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    identity: IdentityVerifier = Depends(get_identity_verifier),
):
    """
    Pobiera szczegóły zamówienia (tylko własne zamówienia użytkownika).
    """
    try:
        return OrderQueryService(db).get_user_order(order_id, identity.resolve(user_id))
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

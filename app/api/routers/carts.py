# app/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.api.deps import get_identity_verifier
from app.data.database import get_db
from app.domain.errors import ShopError
from app.domain.schemas import CartAddIn, CartUpdateIn, CartLineOut, CartItemOut, MessageOut
from app.services.cart_service import CartService
from app.services.identity_service import IdentityVerifier

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=List[CartLineOut])
def get_cart(
    user_id: int | None = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    identity: IdentityVerifier = Depends(get_identity_verifier),
):
    try:
        return CartService(db).list_cart(identity.resolve(user_id))
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=CartItemOut, status_code=201)
def add_item(
    payload: CartAddIn,
    response: Response,
    db: Session = Depends(get_db),
    identity: IdentityVerifier = Depends(get_identity_verifier),
):
    try:
        item, created = CartService(db).add_product(
            user_id=identity.resolve(payload.user_id),
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if not created:
        response.status_code = 200
    return item


@router.put("/{item_id}", response_model=CartItemOut | MessageOut)
def update_item(
    item_id: int,
    payload: CartUpdateIn,
    db: Session = Depends(get_db),
    identity: IdentityVerifier = Depends(get_identity_verifier),
):
    try:
        item = CartService(db).set_quantity(identity.resolve(payload.user_id), item_id, payload.quantity)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if item is None:
        return MessageOut(message="Item removed from cart")
    return item


@router.delete("/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: int,
    user_id: int | None = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    identity: IdentityVerifier = Depends(get_identity_verifier),
):
    try:
        CartService(db).remove_item(identity.resolve(user_id), item_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="Item removed from cart")

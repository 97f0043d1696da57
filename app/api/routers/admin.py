# app/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import ShopError
from app.domain.schemas import AdminOrderOut, OrderOut, OrderStatusIn
from app.services.order_query_service import OrderQueryService
from app.services.order_service import OrderService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/orders", response_model=List[AdminOrderOut])
def list_all_orders(db: Session = Depends(get_db)):
    return OrderQueryService(db).list_all_orders()


@router.put("/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(order_id: int, payload: OrderStatusIn, db: Session = Depends(get_db)):
    try:
        return OrderService(db).set_status(order_id, payload.status)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

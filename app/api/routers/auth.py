# app/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import ShopError
from app.domain.schemas import RegisterIn, LoginIn, AuthOut
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        user = service.register(payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return AuthOut(message="User created successfully", user=user)


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        user = service.login(payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return AuthOut(message="Login successful", user=user)

# app/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.services.identity_service import IdentityVerifier, CallerSuppliedIdentity, RegisteredUserIdentity
from app.utils.settings import IDENTITY_MODE


def get_identity_verifier(db: Session = Depends(get_db)) -> IdentityVerifier:
    if IDENTITY_MODE == "registered":
        return RegisteredUserIdentity(db)
    return CallerSuppliedIdentity()

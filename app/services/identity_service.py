# app/services/identity_service.py
from abc import ABC, abstractmethod

from sqlalchemy.orm import Session

from app.domain.errors import InvalidInput
from app.repos.user_repo import UserRepo


class IdentityVerifier(ABC):
    """
    Zamienia identyfikator podany przez klienta na zweryfikowane user_id.
    Serwisy domenowe dostają już rozwiązane id i niczego nie zakładają.
    """

    @abstractmethod
    def resolve(self, user_id: int | None) -> int:
        ...


class CallerSuppliedIdentity(IdentityVerifier):
    """Ufa id podanemu w zapytaniu (brak sesji i tokenów)."""

    def resolve(self, user_id: int | None) -> int:
        if user_id is None:
            raise InvalidInput("userId is required")
        return user_id


class RegisteredUserIdentity(CallerSuppliedIdentity):
    """Jak wyżej, ale id musi należeć do zarejestrowanego użytkownika."""

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def resolve(self, user_id: int | None) -> int:
        user_id = super().resolve(user_id)
        if not self.repo.get_user(user_id):
            raise InvalidInput("Unknown user")
        return user_id

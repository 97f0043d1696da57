# app/services/user_service.py
import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.domain.errors import Conflict, InvalidInput
from app.domain.schemas import RegisterIn, LoginIn, UserRead
from app.repos.user_repo import UserRepo
from app.utils.settings import BCRYPT_ROUNDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> UserRead:
        email = payload.email.strip().lower()

        if self.repo.get_by_email(email):
            raise Conflict("User already exists")

        user = UserModel(
            email=email,
            password_hash=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
        try:
            created = self.repo.add_user(user)
            self.repo.commit()
        except IntegrityError:
            # rownolegla rejestracja na ten sam email
            self.repo.rollback()
            raise Conflict("User already exists")

        logger.info("User registered", user_id=created.id)
        return UserRead.model_validate(created)

    def login(self, payload: LoginIn) -> UserRead:
        user = self.repo.get_by_email(payload.email.strip().lower())

        if not user or not verify_password(payload.password, user.password_hash):
            raise InvalidInput("Invalid credentials")

        return UserRead.model_validate(user)


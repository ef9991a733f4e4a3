import logging

from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tasks_database.models import User

from ..config import Settings
from ..errors import AuthError, ConflictError, NotFoundError, ServerError, ValidationError
from ..security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registers and authenticates users and issues their bearer tokens.

    Results are ``(token, user)`` pairs; the password hash never leaves
    this class.
    """

    def __init__(self, db: Session, settings: Settings, pwd_context: CryptContext):
        self.db = db
        self.settings = settings
        self.pwd_context = pwd_context

    def register(self, username, email, password):
        if not username or not email or not password:
            raise ValidationError("Please provide all required fields")

        try:
            existing = (
                self.db.query(User)
                .filter(or_(User.email == email, User.username == username))
                .first()
            )
            if existing:
                raise ConflictError("User already exists")

            user = User(
                username=username,
                email=email,
                password=get_password_hash(self.pwd_context, password),
            )
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError:
            # lost a race with a concurrent registration of the same name
            self.db.rollback()
            raise ConflictError("User already exists")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Register failed")
            raise ServerError()

        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return self._issue(user), user

    def login(self, email, password):
        if not email or not password:
            raise ValidationError("Please provide email and password")

        try:
            user = self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError:
            logger.exception("Login lookup failed")
            raise ServerError()

        if not user or not verify_password(self.pwd_context, password, user.password):
            logger.warning("Failed login attempt: invalid credentials")
            raise AuthError("Invalid credentials")

        logger.info("User id=%s logged in", user.id)
        return self._issue(user), user

    def profile(self, user_id):
        try:
            user = self.db.get(User, user_id)
        except SQLAlchemyError:
            logger.exception("Profile lookup failed")
            raise ServerError()
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _issue(self, user):
        return create_access_token(self.settings, user.id, user.username)

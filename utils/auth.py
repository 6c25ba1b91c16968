from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from models.database import get_db
from models.user import User
from utils.config import Settings
from utils.errors import Unauthorized

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Missing credentials are reported through Unauthorized so the body stays {"message": ...}
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_password_hash(password):
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings):
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


class CallerSession(Protocol):
    def current_user_id(self) -> Optional[str]:
        ...


class TokenSession:
    """Resolves the caller from a bearer token whose subject is a user id."""

    def __init__(self, token: Optional[str], db: Session, settings: Settings):
        self.token = token
        self.db = db
        self.settings = settings

    def current_user_id(self) -> Optional[str]:
        if not self.token:
            return None
        payload = decode_token(self.token, self.settings)
        if not payload or not payload.get("sub"):
            return None
        user = self.db.get(User, payload["sub"])
        return user.id if user else None


def get_caller_session(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> CallerSession:
    return TokenSession(token, db, request.app.state.settings)


def get_current_user_id(session: CallerSession = Depends(get_caller_session)) -> str:
    user_id = session.current_user_id()
    if not user_id:
        raise Unauthorized()
    return user_id


def get_current_user(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)) -> User:
    user = db.get(User, user_id)
    if not user:
        raise Unauthorized()
    return user

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from models.database import get_db
from models.user import User
from schemas.user import Token, UserCreate, UserResponse
from utils.auth import create_access_token, get_password_hash, verify_password
from utils.errors import InvalidRequest, Unauthorized

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    email = user_in.email.lower()
    if db.query(User).filter_by(email=email).first():
        raise InvalidRequest("Email already registered")

    user = User(name=user_in.name, email=email, hashed_password=get_password_hash(user_in.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent registration for the same email
        db.rollback()
        raise InvalidRequest("Email already registered")
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


# OAuth2 password form; the username field carries the email
@router.post("/login", response_model=Token)
def login(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter_by(email=form_data.username.lower()).first()
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise Unauthorized("Invalid credentials")

    token = create_access_token({"sub": user.id}, request.app.state.settings)
    return {"access_token": token, "token_type": "bearer"}

"""
API endpoints for registration, login and the current identity
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from . import models, schemas
from .auth import create_access_token, get_current_user, hash_password, verify_password
from .database import get_db, utcnow
from .errors import Conflict, Unauthenticated, ValidationError
from .validation import validate_registration

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=schemas.TokenResponse, status_code=201)
def register(payload: schemas.UserRegister, db: Session = Depends(get_db)):
    data = payload.model_dump()
    violations = validate_registration(data)
    if violations:
        raise ValidationError(violations)

    email = payload.email.lower()
    if db.query(models.User).filter(models.User.email == email).first():
        raise Conflict('User already exists')

    user = models.User(
        name=payload.name.strip(),
        email=email,
        password_hash=hash_password(payload.password),
        role=payload.role,
        created_at=utcnow(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered %s user %s", user.role, user.id)
    return schemas.TokenResponse(token=create_access_token(user), user=schemas.User.model_validate(user))


@router.post("/login", response_model=schemas.TokenResponse)
def login(payload: schemas.UserLogin, db: Session = Depends(get_db)):
    user = db.query(models.User).filter(models.User.email == payload.email.strip().lower()).first()
    if user is None or not verify_password(payload.password, user.password_hash):
        raise Unauthenticated('Invalid email or password')
    return schemas.TokenResponse(token=create_access_token(user), user=schemas.User.model_validate(user))


@router.get("/me", response_model=schemas.User)
def me(user=Depends(get_current_user)):
    return user

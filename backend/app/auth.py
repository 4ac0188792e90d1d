"""
Password hashing and bearer tokens.

Tokens are HS256 JWTs whose subject is the user id; get_current_user is the
FastAPI dependency every protected route goes through.
"""
import datetime
import logging

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from . import models, policy
from .config import Config
from .database import get_db
from .errors import Unauthenticated

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=Config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def create_access_token(user) -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        'sub': str(user.id),
        'role': user.role,
        'iat': now,
        'exp': now + datetime.timedelta(minutes=Config.JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(payload, Config.JWT_SECRET_KEY, algorithm=Config.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """Return the user id carried by a token, or raise Unauthenticated."""
    try:
        payload = jwt.decode(token, Config.JWT_SECRET_KEY, algorithms=[Config.JWT_ALGORITHM])
        return int(payload['sub'])
    except jwt.ExpiredSignatureError:
        raise Unauthenticated('Not authorized, token expired')
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        logger.warning("Rejected bearer token: %s", e)
        raise Unauthenticated('Not authorized, token failed')


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
):
    if credentials is None or credentials.scheme.lower() != 'bearer':
        raise Unauthenticated('Not authorized, no token')
    user_id = decode_access_token(credentials.credentials)
    user = db.get(models.User, user_id)
    if user is None:
        raise Unauthenticated('Not authorized, user no longer exists')
    return user


def require_role(role: str):
    """Dependency factory: the authenticated user, provided it has `role`."""
    def dependency(user=Depends(get_current_user)):
        policy.authorize(policy.has_role(user, role), f'Access denied. {role.capitalize()} role required.')
        return user
    return dependency


require_organization = require_role(models.ROLE_ORGANIZATION)
require_supporter = require_role(models.ROLE_SUPPORTER)

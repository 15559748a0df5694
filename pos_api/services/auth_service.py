"""
Authentication service for bearer tokens.

Resolves `Authorization: Bearer <token>` headers to a user identity and
issues new session tokens, either directly (CLI) or after exchanging a
Google access token for the user's email.
"""
import logging
import secrets
from collections import namedtuple
from datetime import datetime, timedelta
from typing import Optional

import requests
from sqlalchemy.orm import Session

from pos_api.models import AppUser, AuthToken, Company

logger = logging.getLogger(__name__)

UserIdentity = namedtuple(
    'UserIdentity',
    ['id', 'full_name', 'initial', 'email', 'company_id', 'company_name']
)


def extract_bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    """Return the token part of an Authorization header, or None."""
    if not authorization_header:
        return None
    token = authorization_header.replace('Bearer ', '', 1).strip()
    return token or None


def resolve_token(session: Session, token: str, now: Optional[datetime] = None) -> Optional[UserIdentity]:
    """Map a non-expired token to its user and company, or None."""
    if not token:
        return None
    now = now or datetime.now()

    row = session.query(
        AppUser.id,
        AppUser.full_name,
        AppUser.initial,
        AppUser.email,
        Company.id.label('company_id'),
        Company.name.label('company_name')
    ).join(
        AuthToken, AuthToken.user_id == AppUser.id
    ).join(
        Company, AppUser.company_id == Company.id
    ).filter(
        AuthToken.token == token,
        AuthToken.expired > now
    ).first()

    if not row:
        return None
    return UserIdentity(*row)


def issue_token(session: Session, user: AppUser, ttl_hours: int = 4) -> str:
    """Create a session token for user. The caller commits."""
    token = secrets.token_hex(20)
    session.add(AuthToken(
        token=token,
        user_id=user.id,
        expired=datetime.now() + timedelta(hours=ttl_hours)
    ))
    session.flush()
    logger.info(f"Issued session token for user_id={user.id}")
    return token


class GoogleUserInfoError(Exception):
    """Google rejected the access token or could not be reached."""


def fetch_google_email(access_token: str, userinfo_url: str, timeout: int = 10) -> str:
    """Exchange a Google OAuth access token for the account email."""
    try:
        response = requests.get(
            userinfo_url,
            params={'access_token': access_token},
            timeout=timeout
        )
        response.raise_for_status()
        profile = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Google userinfo request failed: {e}")
        raise GoogleUserInfoError('Invalid token or user data not found') from e

    email = profile.get('email')
    if not email:
        raise GoogleUserInfoError('Invalid token or user data not found')
    return email


def find_user_by_email(session: Session, email: str) -> Optional[AppUser]:
    return session.query(AppUser).filter(AppUser.email == email).first()

"""Authentication blueprint - session token exchange and current user."""
from flask import Blueprint, request, current_app, g
from pos_api.database import get_session
from pos_api.models import AppUser
from pos_api.services.auth_service import (
    fetch_google_email, find_user_by_email, issue_token, GoogleUserInfoError
)
from pos_api.middleware import require_token
from pos_api.exceptions import BadRequestError, UnauthorizedError
from pos_api.utils.responses import success

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/token', methods=['GET'])
def get_token():
    """
    Exchange a Google access token (header `Token`) for a session token.

    The Google account email must belong to a registered user.
    """
    google_token = request.headers.get('Token')
    if not google_token:
        raise BadRequestError('Authorization header missing')

    config = current_app.config
    try:
        email = fetch_google_email(
            google_token,
            config['GOOGLE_USERINFO_URL'],
            timeout=config.get('GOOGLE_USERINFO_TIMEOUT', 10)
        )
    except GoogleUserInfoError as e:
        raise BadRequestError(str(e))

    db_session = get_session()
    user = find_user_by_email(db_session, email)
    if not user:
        current_app.logger.warning(f"Token requested for unregistered email: {email}")
        raise UnauthorizedError()

    token = issue_token(db_session, user, ttl_hours=config.get('TOKEN_TTL_HOURS', 4))
    db_session.commit()
    return success(token)


@auth_bp.route('/user', methods=['GET'])
@require_token
def current_user():
    """Profile of the token owner with the stores they can sell from."""
    user = get_session().get(AppUser, g.user.id)
    stores = [store.to_dict() for store in user.stores]

    return success({
        'id': g.user.id,
        'fullName': g.user.full_name,
        'initial': g.user.initial,
        'email': g.user.email,
        'companyId': g.user.company_id,
        'companyName': g.user.company_name,
        'userStores': stores,
        'store': stores[0] if stores else None,
    })

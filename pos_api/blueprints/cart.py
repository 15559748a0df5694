"""Sales cart blueprint - add, edit, remove and list cart lines."""
from flask import Blueprint, request, current_app, g
from sqlalchemy.exc import SQLAlchemyError
from pos_api.database import get_session
from pos_api.models import DiscountType
from pos_api.services.cart_service import CartStore
from pos_api.services.product_service import find_product_by_id
from pos_api.middleware import require_token
from pos_api.exceptions import BadRequestError, NotFoundError, SystemFaultError
from pos_api.utils.responses import success
from pos_api.utils.validators import to_int, has_non_finite
from pos_api.blueprints.metrics import cart_items_added_total

cart_bp = Blueprint('cart', __name__, url_prefix='/sales-cart')


def _json_payload(strict: bool = False) -> dict:
    """Request JSON body as a dict; strict mode rejects malformed JSON."""
    payload = request.get_json(silent=True)
    # NaN and Infinity are not JSON; treat such bodies as unreadable
    if not isinstance(payload, dict) or has_non_finite(payload):
        if strict:
            raise BadRequestError('Invalid JSON format')
        return {}
    return payload


def _require_fields(payload: dict, *fields):
    if any(payload.get(field) is None for field in fields):
        raise BadRequestError('Missing parameter')


@cart_bp.route('', methods=['POST'])
@require_token
def add_item():
    """Add a product to the cart, merging with an existing line."""
    payload = _json_payload()
    _require_fields(payload, 'store', 'product', 'qty')

    store_id = to_int(payload.get('store'))
    product_id = to_int(payload.get('product'))
    qty = to_int(payload.get('qty'))

    if store_id < 1 or product_id < 1 or qty < 0:
        raise BadRequestError('Incorrect parameter value')

    db_session = get_session()
    product = find_product_by_id(db_session, product_id)
    if not product:
        raise NotFoundError('Missing product', status_code=400)

    try:
        cart_line_id = CartStore(db_session).upsert(
            g.user.id, store_id, product_id, qty,
            product.sale_price, DiscountType.FIXED, 0
        )
        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        current_app.logger.error(f"Error in add_item: {str(e)}", exc_info=True)
        raise SystemFaultError('Failed to insert data')

    if not cart_line_id:
        raise SystemFaultError('Failed to insert data')

    cart_items_added_total.inc()
    current_app.logger.info(
        f"Cart line {cart_line_id} upserted: user_id={g.user.id}, store_id={store_id}, "
        f"product_id={product_id}, qty=+{qty}"
    )
    return success(cart_line_id)


@cart_bp.route('', methods=['PUT'])
@require_token
def edit_item():
    """Replace the quantity of one of the caller's cart lines."""
    payload = _json_payload(strict=True)
    _require_fields(payload, 'id', 'qty')

    cart_line_id = to_int(payload.get('id'))
    qty = to_int(payload.get('qty'))

    if cart_line_id < 1 or qty < 0:
        raise BadRequestError('Incorrect parameter value')

    db_session = get_session()
    try:
        updated = CartStore(db_session).edit_quantity(cart_line_id, qty, user_id=g.user.id)
        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        current_app.logger.error(f"Error in edit_item: {str(e)}", exc_info=True)
        updated = False

    if not updated:
        raise SystemFaultError('Failed to update sales cart', message='Error')
    return success(True)


@cart_bp.route('', methods=['DELETE'])
@require_token
def delete_item():
    """Remove one of the caller's cart lines."""
    payload = _json_payload(strict=True)
    _require_fields(payload, 'id')

    cart_line_id = to_int(payload.get('id'))
    if cart_line_id < 1:
        raise BadRequestError('Incorrect parameter value')

    db_session = get_session()
    try:
        deleted = CartStore(db_session).delete(cart_line_id, user_id=g.user.id)
        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        current_app.logger.error(f"Error in delete_item: {str(e)}", exc_info=True)
        deleted = False

    if not deleted:
        raise SystemFaultError('Failed to delete item', message='Internal Server Error')
    return success(True)


@cart_bp.route('', methods=['GET'])
@require_token
def list_items():
    """Cart lines of the caller at one store, with product name and stock."""
    store_id = to_int(request.args.get('store'))
    if store_id < 1:
        raise SystemFaultError('System error')

    lines = CartStore(get_session()).list_for_store(g.user.id, store_id)
    return success(lines)

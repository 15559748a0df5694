"""Sales orders blueprint - checkout of the cart into an order."""
from functools import partial
from flask import Blueprint, request, current_app, g
from pos_api.database import get_session
from pos_api.services.checkout_service import (
    CheckoutRequest, CheckoutTransaction, Abort, generate_order_number
)
from pos_api.services.stock_service import StockLedger
from pos_api.middleware import require_token
from pos_api.exceptions import BadRequestError, SystemFaultError
from pos_api.utils.responses import success
from pos_api.utils.validators import to_int, parse_date, has_non_finite
from pos_api.blueprints.metrics import checkout_total

orders_bp = Blueprint('orders', __name__, url_prefix='/sales-orders')


def build_checkout(db_session) -> CheckoutTransaction:
    """Wire a CheckoutTransaction from the app configuration."""
    config = current_app.config
    return CheckoutTransaction(
        db_session,
        stock_ledger=StockLedger(db_session, allow_negative=config.get('STOCK_ALLOW_NEGATIVE', True)),
        order_number_factory=partial(generate_order_number, config.get('ORDER_NUMBER_PREFIX', 'TRJ'))
    )


@orders_bp.route('', methods=['POST'])
@require_token
def create_order():
    """Convert every cart line of the caller at a store into a sales order."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or has_non_finite(payload):
        payload = {}

    checkout_request = CheckoutRequest(
        user_id=g.user.id,
        store_id=to_int(payload.get('store_id')),
        payment_cash=to_int(payload.get('payment_cash')),
        payment_non_cash=to_int(payload.get('payment_non_cash')),
        date=parse_date(payload.get('date'))
    )

    result = build_checkout(get_session()).run(checkout_request)

    if isinstance(result, Abort):
        if result.is_validation_error:
            checkout_total.labels(outcome='rejected').inc()
            raise BadRequestError('Bad request')
        checkout_total.labels(outcome='aborted').inc()
        # The underlying cause is passed through to the caller as-is
        raise SystemFaultError(result.reason, message='Internal Server Error')

    checkout_total.labels(outcome='committed').inc()
    return success(result.value)

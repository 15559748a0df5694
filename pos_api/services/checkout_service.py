"""
Checkout service with transactional logic.

Turns every cart line a user has at one store into a sales order:
order header, one detail row per line, a stock decrement per line and the
removal of the consumed cart lines, all inside a single database transaction.

Each step returns an explicit result (`Ok` or `Abort`) instead of raising;
`run_atomically` guarantees a rollback for an `Abort` and for any storage
fault, and commits only on `Ok`.
"""
import dataclasses
import enum
import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_api.models import CartLine, SalesOrder, SalesOrderDetail
from pos_api.services.cart_service import CartStore
from pos_api.services.stock_service import StockLedger

logger = logging.getLogger(__name__)

EMPTY_CART_MESSAGE = 'No items in cart.'


class CheckoutState(enum.Enum):
    """Checkout progress, in execution order."""
    PENDING = 'PENDING'
    VALIDATED = 'VALIDATED'
    CART_LOADED = 'CART_LOADED'
    TOTALS_COMPUTED = 'TOTALS_COMPUTED'
    ORDER_HEADER_WRITTEN = 'ORDER_HEADER_WRITTEN'
    LINES_AND_STOCK_WRITTEN = 'LINES_AND_STOCK_WRITTEN'
    CART_CLEARED = 'CART_CLEARED'
    COMMITTED = 'COMMITTED'
    ABORTED = 'ABORTED'


@dataclass(frozen=True)
class Ok:
    value: Any = None


@dataclass(frozen=True)
class Abort:
    reason: str
    # Last state reached before the failure; None until the caller knows it
    state: Optional[CheckoutState] = None

    @property
    def is_validation_error(self) -> bool:
        return self.state == CheckoutState.PENDING


StepResult = Union[Ok, Abort]


@dataclass(frozen=True)
class CheckoutRequest:
    user_id: int
    store_id: int
    payment_cash: int
    payment_non_cash: int
    date: Optional[date]

    def validate(self) -> StepResult:
        """Reject the request before any storage access."""
        if not self.user_id or self.store_id < 1 or not self.date:
            return Abort('Bad request', CheckoutState.PENDING)
        if self.payment_cash < 0 or self.payment_non_cash < 0:
            return Abort('Bad request', CheckoutState.PENDING)
        if self.payment_cash + self.payment_non_cash <= 0:
            return Abort('Bad request', CheckoutState.PENDING)
        return Ok(self)


@dataclass(frozen=True)
class OrderTotals:
    grand_total: int
    receivable: int


def compute_totals(lines: List[CartLine], payment_cash: int, payment_non_cash: int) -> OrderTotals:
    """Grand total of the lines and the unpaid balance, floored at zero."""
    grand_total = sum(line.line_total for line in lines)
    receivable = max(0, grand_total - payment_cash - payment_non_cash)
    return OrderTotals(grand_total=grand_total, receivable=receivable)


def generate_order_number(prefix: str = 'TRJ', now: Optional[float] = None) -> str:
    """
    Time-derived order number: prefix + 8 hex digits of seconds + 5 hex
    digits of microseconds (the layout of PHP's uniqid).

    Not guaranteed unique under concurrent checkouts in the same microsecond.
    """
    now = time.time() if now is None else now
    seconds = int(now)
    micros = int((now - seconds) * 1_000_000) % 1_000_000
    return f'{prefix}{seconds:08x}{micros:05x}'


def run_atomically(session: Session, work: Callable[[], StepResult]) -> StepResult:
    """
    Run `work` as one transaction.

    Commits when it returns `Ok`; rolls back when it returns `Abort` or when
    the storage layer raises (including at commit time).
    """
    try:
        result = work()
        if isinstance(result, Abort):
            session.rollback()
            return result
        session.commit()
        return result
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Storage fault, transaction rolled back: {e}", exc_info=True)
        return Abort(str(getattr(e, 'orig', None) or e))


class CheckoutTransaction:
    """
    Checkout state machine for one request.

    PENDING -> VALIDATED -> CART_LOADED -> TOTALS_COMPUTED ->
    ORDER_HEADER_WRITTEN -> LINES_AND_STOCK_WRITTEN -> CART_CLEARED ->
    COMMITTED, or ABORTED from any state with everything rolled back.
    """

    def __init__(
        self,
        session: Session,
        cart_store: Optional[CartStore] = None,
        stock_ledger: Optional[StockLedger] = None,
        order_number_factory: Callable[[], str] = generate_order_number
    ):
        self.session = session
        self.cart_store = cart_store or CartStore(session)
        self.stock_ledger = stock_ledger or StockLedger(session)
        self.order_number_factory = order_number_factory
        self.state = CheckoutState.PENDING
        self.transitions = [CheckoutState.PENDING]

    def run(self, request: CheckoutRequest) -> StepResult:
        """Execute the checkout; returns Ok({'order_id': ...}) or Abort."""
        validated = request.validate()
        if isinstance(validated, Abort):
            self._advance(CheckoutState.ABORTED)
            return validated
        self._advance(CheckoutState.VALIDATED)

        result = run_atomically(self.session, lambda: self._execute(request))

        if isinstance(result, Abort):
            if result.state is None:
                result = dataclasses.replace(result, state=self.state)
            self._advance(CheckoutState.ABORTED)
            logger.warning(
                f"Checkout aborted at {result.state.value} for user_id={request.user_id}, "
                f"store_id={request.store_id}: {result.reason}"
            )
            return result

        self._advance(CheckoutState.COMMITTED)
        logger.info(
            f"Checkout committed: order_id={result.value['order_id']}, "
            f"user_id={request.user_id}, store_id={request.store_id}"
        )
        return result

    # =====================================================
    # STEPS (run inside the transaction)
    # =====================================================

    def _execute(self, request: CheckoutRequest) -> StepResult:
        loaded = self._load_cart(request)
        if isinstance(loaded, Abort):
            return loaded
        lines = loaded.value

        totals = compute_totals(lines, request.payment_cash, request.payment_non_cash)
        order_number = self.order_number_factory()
        self._advance(CheckoutState.TOTALS_COMPUTED)

        order = self._write_order_header(request, totals, order_number)

        written = self._write_lines_and_stock(request, order, lines)
        if isinstance(written, Abort):
            return written

        self.cart_store.clear_store(request.user_id, request.store_id)
        self._advance(CheckoutState.CART_CLEARED)

        return Ok({'order_id': order.id})

    def _load_cart(self, request: CheckoutRequest) -> StepResult:
        lines = self.cart_store.lines_for_store(request.user_id, request.store_id)
        if not lines:
            return Abort(EMPTY_CART_MESSAGE, self.state)
        self._advance(CheckoutState.CART_LOADED)
        return Ok(lines)

    def _write_order_header(self, request: CheckoutRequest, totals: OrderTotals, order_number: str) -> SalesOrder:
        order = SalesOrder(
            order_number=order_number,
            user_id=request.user_id,
            store_id=request.store_id,
            date=request.date,
            grand_total=totals.grand_total,
            payment_cash=request.payment_cash,
            payment_non_cash=request.payment_non_cash,
            receivable=totals.receivable
        )
        self.session.add(order)
        self.session.flush()
        self._advance(CheckoutState.ORDER_HEADER_WRITTEN)
        return order

    def _write_lines_and_stock(self, request: CheckoutRequest, order: SalesOrder, lines: List[CartLine]) -> StepResult:
        for line in lines:
            self.session.add(SalesOrderDetail(
                order_id=order.id,
                product_id=line.product_id,
                qty=line.qty,
                base_price=line.base_price,
                discount_type=line.discount_type,
                discount_value=line.discount_value,
                discount_amount=line.discount_amount,
                sale_price=line.sale_price,
                total_price=line.line_total
            ))
            self.session.flush()

            rows = self.stock_ledger.decrement(request.store_id, line.product_id, line.qty)
            if rows == 0:
                return Abort(f'Stock update failed for product_id: {line.product_id}', self.state)

        self._advance(CheckoutState.LINES_AND_STOCK_WRITTEN)
        return Ok(order)

    def _advance(self, state: CheckoutState):
        self.state = state
        self.transitions.append(state)

"""Stock ledger - per-store product quantities."""
import logging

from sqlalchemy.orm import Session

from pos_api.models import StockRecord

logger = logging.getLogger(__name__)


class StockLedger:
    """
    Quantity counters keyed by (store_id, product_id).

    With `allow_negative=True` (historical behavior) a decrement only fails
    when the stock row does not exist. With `allow_negative=False` the update
    is conditional and an insufficient quantity also affects zero rows.
    """

    def __init__(self, session: Session, allow_negative: bool = True):
        self.session = session
        self.allow_negative = allow_negative

    def decrement(self, store_id: int, product_id: int, qty: int) -> int:
        """Subtract qty in a single UPDATE and return the affected row count."""
        query = self.session.query(StockRecord).filter(
            StockRecord.store_id == store_id,
            StockRecord.product_id == product_id
        )
        if not self.allow_negative:
            query = query.filter(StockRecord.qty >= qty)

        rows = query.update(
            {StockRecord.qty: StockRecord.qty - qty},
            synchronize_session=False
        )
        if rows == 0:
            logger.warning(
                f"Stock decrement matched no row: store_id={store_id}, "
                f"product_id={product_id}, qty={qty}"
            )
        return rows

    def quantity(self, store_id: int, product_id: int) -> int:
        """
        Current quantity, 0 when the product has no stock row in the store.

        Point lookup for tests and operator tooling; listings join stock
        in their own query.
        """
        record = self.session.query(StockRecord.qty).filter(
            StockRecord.store_id == store_id,
            StockRecord.product_id == product_id
        ).first()
        return record[0] if record else 0

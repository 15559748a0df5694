"""Sales cart service - persistent cart lines per user and store."""
import logging
from datetime import datetime
from typing import List, Dict, Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from pos_api.models import CartLine, Product, StockRecord, DiscountType
from pos_api.services.pricing_service import compute_price

logger = logging.getLogger(__name__)


class CartStore:
    """Cart lines keyed by (user_id, store_id, product_id)."""

    def __init__(self, session: Session):
        self.session = session

    def upsert(
        self,
        user_id: int,
        store_id: int,
        product_id: int,
        qty: int,
        base_price: int,
        discount_type=DiscountType.FIXED,
        discount_value: int = 0
    ) -> int:
        """
        Add qty of a product to the cart, merging with an existing line.

        On merge the quantity accumulates while every pricing field is
        overwritten from this call's inputs. Returns the line id, or 0 when
        the existing line vanished before it could be updated.

        The lookup and the write are two statements; two concurrent adds for
        the same key can lose one update.
        """
        price = compute_price(base_price, discount_type, discount_value)
        discount_type = DiscountType(discount_type)

        existing = self.session.query(CartLine.id, CartLine.qty).filter(
            CartLine.product_id == product_id,
            CartLine.user_id == user_id,
            CartLine.store_id == store_id
        ).first()

        if existing:
            rows = self.session.query(CartLine).filter(
                CartLine.id == existing.id
            ).update({
                CartLine.qty: existing.qty + qty,
                CartLine.base_price: base_price,
                CartLine.discount_type: discount_type,
                CartLine.discount_value: price.discount_value,
                CartLine.discount_amount: price.discount_amount,
                CartLine.sale_price: price.sale_price,
                CartLine.updated: datetime.now(),
            }, synchronize_session=False)

            if rows == 0:
                logger.warning(f"Cart line {existing.id} disappeared during merge")
                return 0
            return existing.id

        line = CartLine(
            user_id=user_id,
            store_id=store_id,
            product_id=product_id,
            qty=qty,
            base_price=base_price,
            discount_type=discount_type,
            discount_value=price.discount_value,
            discount_amount=price.discount_amount,
            sale_price=price.sale_price,
        )
        self.session.add(line)
        # Flush only to obtain the id; the caller owns the commit
        self.session.flush()
        return line.id

    def _line_query(self, cart_line_id: int, user_id: int = None):
        query = self.session.query(CartLine).filter(CartLine.id == cart_line_id)
        if user_id is not None:
            query = query.filter(CartLine.user_id == user_id)
        return query

    def edit_quantity(self, cart_line_id: int, qty: int, user_id: int = None) -> bool:
        """Replace a line's quantity. False when no line matched."""
        rows = self._line_query(cart_line_id, user_id).update({
            CartLine.qty: qty,
            CartLine.updated: datetime.now(),
        }, synchronize_session=False)
        return rows > 0

    def delete(self, cart_line_id: int, user_id: int = None) -> bool:
        """Delete one line. Deleting a missing line still succeeds."""
        self._line_query(cart_line_id, user_id).delete(synchronize_session=False)
        return True

    def lines_for_store(self, user_id: int, store_id: int) -> List[CartLine]:
        """Cart lines of a user at a store, in insertion order."""
        return self.session.query(CartLine).filter(
            CartLine.user_id == user_id,
            CartLine.store_id == store_id
        ).order_by(CartLine.id).all()

    def clear_store(self, user_id: int, store_id: int) -> int:
        """Delete every line of a user at a store and return how many went."""
        return self.session.query(CartLine).filter(
            CartLine.user_id == user_id,
            CartLine.store_id == store_id
        ).delete(synchronize_session=False)

    def list_for_store(self, user_id: int, store_id: int) -> List[Dict[str, Any]]:
        """Cart lines joined with the product name and the store's stock."""
        rows = self.session.query(
            CartLine.id,
            Product.name,
            CartLine.qty,
            CartLine.base_price,
            CartLine.discount_type,
            CartLine.discount_value,
            CartLine.discount_amount,
            CartLine.sale_price,
            func.coalesce(StockRecord.qty, 0).label('stock')
        ).join(
            Product, CartLine.product_id == Product.id
        ).outerjoin(
            StockRecord,
            (StockRecord.product_id == Product.id) & (StockRecord.store_id == store_id)
        ).filter(
            CartLine.user_id == user_id,
            CartLine.store_id == store_id
        ).order_by(CartLine.id).all()

        return [
            {
                'id': row.id,
                'name': row.name,
                'qty': row.qty,
                'base_price': row.base_price,
                'discount_type': DiscountType(row.discount_type).value,
                'discount_value': row.discount_value,
                'discount_amount': row.discount_amount,
                'sale_price': row.sale_price,
                'stock': row.stock,
            }
            for row in rows
        ]

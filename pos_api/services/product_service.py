"""Product lookup service (read side of the catalog)."""
from typing import Optional, List, Dict, Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from pos_api.models import Product, StockRecord


def find_product_by_id(session: Session, product_id: int) -> Optional[Product]:
    """Non-deleted product by id, or None."""
    return session.query(Product).filter(
        Product.id == product_id,
        Product.is_deleted == False  # noqa: E712
    ).first()


def search_store_products(session: Session, keyword: str, store_id: int, company_id: int = None) -> List[Dict[str, Any]]:
    """Products whose name contains keyword, with the store's stock."""
    query = session.query(
        Product.id,
        Product.sku,
        Product.name,
        Product.sale_price,
        Product.unit_name,
        func.coalesce(StockRecord.qty, 0).label('stock')
    ).outerjoin(
        StockRecord,
        (StockRecord.product_id == Product.id) & (StockRecord.store_id == store_id)
    ).filter(
        Product.name.like(f'%{keyword}%'),
        Product.is_deleted == False  # noqa: E712
    )
    if company_id is not None:
        query = query.filter(Product.company_id == company_id)
    rows = query.order_by(Product.name).all()

    return [
        {
            'id': row.id,
            'sku': row.sku,
            'name': row.name,
            'sale_price': row.sale_price,
            'unit_name': row.unit_name,
            'stock': row.stock,
        }
        for row in rows
    ]


def search_company_products(session: Session, keyword: str, company_id: int) -> List[Dict[str, Any]]:
    """Company catalog search, without stock."""
    products = session.query(Product).filter(
        Product.name.like(f'%{keyword}%'),
        Product.company_id == company_id,
        Product.is_deleted == False  # noqa: E712
    ).order_by(Product.name).all()

    return [p.to_dict() for p in products]

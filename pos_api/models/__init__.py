"""Models package - exports all SQLAlchemy models."""
# Identity and tenancy
from pos_api.models.company import Company
from pos_api.models.app_user import AppUser
from pos_api.models.store import Store, UserStore
from pos_api.models.auth_token import AuthToken

# Business Models
from pos_api.models.product import Product
from pos_api.models.stock import StockRecord
from pos_api.models.sales_cart import CartLine, DiscountType
from pos_api.models.sales_order import SalesOrder
from pos_api.models.sales_order_detail import SalesOrderDetail

__all__ = [
    'Company', 'AppUser', 'Store', 'UserStore', 'AuthToken',
    'Product', 'StockRecord', 'CartLine', 'DiscountType',
    'SalesOrder', 'SalesOrderDetail',
]

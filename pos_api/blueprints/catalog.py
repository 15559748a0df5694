"""Catalog blueprint - read-only product lookup and search."""
from flask import Blueprint, request, g
from pos_api.database import get_session
from pos_api.services.product_service import (
    find_product_by_id, search_store_products, search_company_products
)
from pos_api.middleware import require_token
from pos_api.exceptions import BadRequestError, NotFoundError
from pos_api.utils.responses import success
from pos_api.utils.validators import to_int

catalog_bp = Blueprint('catalog', __name__, url_prefix='/products')


@catalog_bp.route('', methods=['GET'])
@require_token
def products_list():
    """Search products by name, with store stock when a store is given."""
    db_session = get_session()
    keyword = request.args.get('keyword', '').strip()

    if 'store' in request.args:
        store_id = to_int(request.args.get('store'))
        if store_id < 1:
            raise BadRequestError('Missing parameter')
        products = search_store_products(db_session, keyword, store_id, company_id=g.user.company_id)
    else:
        products = search_company_products(db_session, keyword, g.user.company_id)

    return success(products)


@catalog_bp.route('/<int:product_id>', methods=['GET'])
@require_token
def product_detail(product_id: int):
    """Single non-deleted product."""
    product = find_product_by_id(get_session(), product_id)
    if not product:
        raise NotFoundError('Product not found')
    return success(product.to_dict())

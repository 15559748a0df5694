import pytest
from datetime import datetime, timedelta
from types import SimpleNamespace
import uuid

from pos_api import create_app
from pos_api.models import (
    Company, AppUser, Store, UserStore, AuthToken, Product, StockRecord
)


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing."""
    app = create_app('config.TestConfig')
    app.config['TESTING'] = True
    return app


@pytest.fixture(scope='function')
def database(app):
    """Fresh schema for every test."""
    database = app.extensions['database']
    database.create_all()
    yield database
    database.session.remove()
    database.drop_all()


@pytest.fixture(scope='function')
def session(database):
    """Create database session for testing."""
    session = database.session
    yield session
    session.rollback()


@pytest.fixture(scope='function')
def client(app, database):
    """Create test client."""
    return app.test_client()


def _make_token(session, user_id, expired):
    token = uuid.uuid4().hex
    session.add(AuthToken(token=token, user_id=user_id, expired=expired))
    return token


@pytest.fixture(scope='function')
def world(session):
    """
    One company with two stores, a cashier, a second user and a small catalog.

    Returns plain ids so tests stay valid after request teardown removes
    the scoped session.
    """
    company = Company(name='Toko Maju')
    other_company = Company(name='Toko Lain')
    session.add_all([company, other_company])
    session.flush()

    store = Store(company_id=company.id, name='Store Central', initial='SC')
    other_store = Store(company_id=company.id, name='Store North', initial='SN')
    session.add_all([store, other_store])
    session.flush()

    user = AppUser(company_id=company.id, full_name='Cashier One', initial='C1', email='cashier@test.com')
    other_user = AppUser(company_id=company.id, full_name='Cashier Two', initial='C2', email='cashier2@test.com')
    session.add_all([user, other_user])
    session.flush()
    session.add_all([
        UserStore(user_id=user.id, store_id=store.id),
        UserStore(user_id=user.id, store_id=other_store.id),
    ])

    product_a = Product(company_id=company.id, sku='SKU-A', name='Coffee Beans', purchase_price=700, sale_price=1000, unit_name='pack')
    product_b = Product(company_id=company.id, sku='SKU-B', name='Coffee Filter', purchase_price=300, sale_price=500, unit_name='pcs')
    product_no_stock = Product(company_id=company.id, sku='SKU-C', name='Tea Leaves', purchase_price=200, sale_price=400, unit_name='pack')
    product_deleted = Product(company_id=company.id, sku='SKU-D', name='Old Coffee', sale_price=900, is_deleted=True)
    product_foreign = Product(company_id=other_company.id, sku='SKU-X', name='Coffee Foreign', sale_price=1500)
    session.add_all([product_a, product_b, product_no_stock, product_deleted, product_foreign])
    session.flush()

    session.add_all([
        StockRecord(store_id=store.id, product_id=product_a.id, qty=10),
        StockRecord(store_id=store.id, product_id=product_b.id, qty=5),
        StockRecord(store_id=other_store.id, product_id=product_a.id, qty=3),
    ])

    token = _make_token(session, user.id, datetime.now() + timedelta(hours=4))
    other_token = _make_token(session, other_user.id, datetime.now() + timedelta(hours=4))
    expired_token = _make_token(session, user.id, datetime.now() - timedelta(minutes=1))
    session.commit()

    return SimpleNamespace(
        company_id=company.id,
        store_id=store.id,
        other_store_id=other_store.id,
        user_id=user.id,
        other_user_id=other_user.id,
        product_a_id=product_a.id,
        product_b_id=product_b.id,
        product_no_stock_id=product_no_stock.id,
        product_deleted_id=product_deleted.id,
        product_foreign_id=product_foreign.id,
        token=token,
        other_token=other_token,
        expired_token=expired_token,
    )


@pytest.fixture(scope='function')
def auth_headers(world):
    """Bearer header for the main cashier."""
    return {'Authorization': f'Bearer {world.token}'}

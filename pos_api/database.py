"""Database configuration and initialization."""
from flask import current_app
from sqlalchemy import create_engine, BigInteger, Integer
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# Create SQLAlchemy base
Base = declarative_base()

# BIGINT everywhere except SQLite, where only INTEGER PRIMARY KEY autoincrements
BigId = BigInteger().with_variant(Integer, 'sqlite')


class Database:
    """
    Owns the engine and the scoped session factory for one application.

    Built once by the app factory and handed to whoever needs a session;
    there is no module-level connection.
    """

    def __init__(self, database_uri, echo=False, pool_size=10, max_overflow=20):
        engine_options = {
            'echo': echo,
            'pool_pre_ping': True,  # Enable connection health checks
        }
        if database_uri.startswith('sqlite'):
            # One shared connection so in-memory databases survive across sessions
            engine_options['connect_args'] = {'check_same_thread': False}
            engine_options['poolclass'] = StaticPool
        else:
            engine_options['pool_size'] = pool_size
            engine_options['max_overflow'] = max_overflow

        self.engine = create_engine(database_uri, **engine_options)
        self.session = scoped_session(
            sessionmaker(autoflush=False, bind=self.engine)
        )

    def create_all(self):
        """Create every table known to the declarative base."""
        # Import models so they register on Base.metadata
        import pos_api.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self):
        Base.metadata.drop_all(bind=self.engine)

    def remove_session(self, exception=None):
        """Close the request session, rolling back first on error."""
        if exception:
            self.session.rollback()
        self.session.remove()

    def dispose(self):
        self.session.remove()
        self.engine.dispose()


def init_db(app):
    """Initialize database connection."""
    database = Database(
        app.config['SQLALCHEMY_DATABASE_URI'],
        echo=app.config.get('SQLALCHEMY_ECHO', False),
        pool_size=app.config.get('SQLALCHEMY_POOL_SIZE', 10),
        max_overflow=app.config.get('SQLALCHEMY_MAX_OVERFLOW', 20),
    )
    app.extensions['database'] = database

    # Register teardown
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Close database session and rollback on error."""
        database.remove_session(exception)

    return database


def get_database():
    """Get the Database bound to the current application."""
    return current_app.extensions['database']


def get_session():
    """Get database session."""
    return get_database().session

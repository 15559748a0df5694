"""
Flask CLI commands for operations.

Commands:
- flask init-db: Create all tables
- flask issue-token: Issue a session token for an existing user
- flask stock-level: Show the stock of a product in a store
"""

import click
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from pos_api.database import get_database
from pos_api.services.auth_service import find_user_by_email, issue_token
from pos_api.services.stock_service import StockLedger


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create every table that does not exist yet."""
        get_database().create_all()
        click.echo(click.style('Tables created.', fg='green'))

    @app.cli.command('issue-token')
    @click.option('--email', prompt=True, help='Email of an existing user')
    @click.option('--hours', default=None, type=int, help='Token lifetime in hours')
    def issue_token_command(email, hours):
        """Issue a bearer token without going through Google."""
        db_session = get_database().session
        user = find_user_by_email(db_session, email)
        if not user:
            click.echo(click.style(f'No user with email: {email}', fg='red'))
            return

        ttl_hours = hours or current_app.config.get('TOKEN_TTL_HOURS', 4)
        try:
            token = issue_token(db_session, user, ttl_hours=ttl_hours)
            db_session.commit()
        except SQLAlchemyError as e:
            db_session.rollback()
            click.echo(click.style(f'Error issuing token: {str(e)}', fg='red'))
            return

        click.echo(token)

    @app.cli.command('stock-level')
    @click.option('--store', 'store_id', required=True, type=int, help='Store id')
    @click.option('--product', 'product_id', required=True, type=int, help='Product id')
    def stock_level_command(store_id, product_id):
        """Print the current stock of a product in a store."""
        qty = StockLedger(get_database().session).quantity(store_id, product_id)
        color = 'red' if qty < 0 else None
        click.echo(click.style(str(qty), fg=color))

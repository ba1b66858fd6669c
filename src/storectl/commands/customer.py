"""Command group: customer accounts and remember-me credentials."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from storectl.commands._base import StoreGroup

if TYPE_CHECKING:
    from storectl.commands._context import AppContext

_CUSTOMER_EXAMPLES = """\
  storectl customer add jane@example.com --firstname Jane
  storectl --json customer remember jane@example.com
  storectl customer authenticate jane@example.com SERIAL TOKEN
  storectl customer forget jane@example.com"""


@click.group(cls=StoreGroup, examples=_CUSTOMER_EXAMPLES)
@click.pass_obj
def customer(app: AppContext) -> None:
    """Manage customers and remember-me tokens."""


@customer.command(examples="  storectl customer add jane@example.com --firstname Jane")
@click.argument("email")
@click.option("--firstname", default="", help="First name.")
@click.option("--lastname", default="", help="Last name.")
@click.pass_obj
def add(app: AppContext, email: str, firstname: str, lastname: str) -> None:
    """Create a customer account."""
    from storectl.services.customer import CustomerService

    app.emit(CustomerService(app.store).add(email, firstname=firstname, lastname=lastname))


@customer.command(examples="  storectl --json customer remember jane@example.com")
@click.argument("email")
@click.pass_obj
def remember(app: AppContext, email: str) -> None:
    """Issue a new remember-me serial and token."""
    from storectl.services.customer import CustomerTokenService

    app.emit(CustomerTokenService(app.store).remember(email))


@customer.command(examples="  storectl customer forget jane@example.com")
@click.argument("email")
@click.pass_obj
def forget(app: AppContext, email: str) -> None:
    """Revoke a customer's remember-me credentials."""
    from storectl.services.customer import CustomerTokenService

    app.emit(CustomerTokenService(app.store).forget(email))


@customer.command(examples="  storectl customer authenticate jane@example.com SERIAL TOKEN")
@click.argument("username")
@click.argument("serial")
@click.argument("token")
@click.pass_obj
def authenticate(app: AppContext, username: str, serial: str, token: str) -> None:
    """Look up the customer owning a remember-me credential."""
    from storectl.services.customer import CustomerTokenService

    app.emit(CustomerTokenService(app.store).authenticate(username, serial, token))

"""Customer accounts and "remember me" token authentication.

A remember-me credential is the triple (email, serial, token). Lookup
matches all three at once; any mismatch is a plain NOT_FOUND so callers
cannot tell which part was wrong.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any

from pydantic import ValidationError
from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError

from storectl.domain.customer import CustomerAccount
from storectl.infrastructure.database.schema import customers
from storectl.services._helpers import now_iso
from storectl.services.base import BaseService
from storectl.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)

_PUBLIC_COLUMNS = (customers.c.id, customers.c.email, customers.c.firstname, customers.c.lastname)


class CustomerService(BaseService):
    """Customer account records."""

    def add(self, email: str, *, firstname: str = "", lastname: str = "") -> ServiceResult:
        op = "customer_add"
        try:
            account = CustomerAccount(email=email, firstname=firstname, lastname=lastname)
        except ValidationError:
            return fail(op, "INVALID_EMAIL", f"Invalid email address: {email!r}")
        email = account.email

        try:
            with self._store.transaction() as txn:
                result = txn.conn.execute(
                    insert(customers).values(
                        email=email,
                        firstname=firstname,
                        lastname=lastname,
                        created=now_iso(),
                    )
                )
                customer_id = result.inserted_primary_key[0]
        except IntegrityError:
            return fail(op, "DUPLICATE_EMAIL", f"A customer with email {email!r} already exists")

        return ServiceResult(
            ok=True,
            op=op,
            data={"id": customer_id, "email": email, "firstname": firstname, "lastname": lastname},
        )


class CustomerTokenService(BaseService):
    """Issues, checks, and revokes remember-me credentials."""

    def authenticate(self, username: str, serial: str, token: str) -> ServiceResult:
        """Find the customer whose email, serial, and token all match."""
        op = "customer_authenticate"
        if not (username and serial and token):
            return fail(op, "NOT_FOUND", "No customer matches these credentials")

        stmt = select(*_PUBLIC_COLUMNS).where(
            customers.c.email == username.strip().lower(),
            customers.c.remember_me_serial == serial,
            customers.c.remember_me_token == token,
        )
        with self._store.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()

        if row is None:
            logger.debug("Remember-me lookup failed for %s", username)
            return fail(op, "NOT_FOUND", "No customer matches these credentials")
        return ServiceResult(ok=True, op=op, data=dict(row))

    def remember(self, email: str) -> ServiceResult:
        """Issue a fresh serial/token pair, replacing any previous one."""
        op = "customer_remember"
        serial = secrets.token_hex(16)
        token = secrets.token_urlsafe(32)
        row = self._write_credentials(email, serial, token)
        if row is None:
            return fail(op, "NOT_FOUND", f"No customer found with email: {email}")
        return ServiceResult(ok=True, op=op, data={**row, "serial": serial, "token": token})

    def forget(self, email: str) -> ServiceResult:
        op = "customer_forget"
        row = self._write_credentials(email, None, None)
        if row is None:
            return fail(op, "NOT_FOUND", f"No customer found with email: {email}")
        return ServiceResult(ok=True, op=op, data=row)

    def _write_credentials(
        self, email: str, serial: str | None, token: str | None
    ) -> dict[str, Any] | None:
        email = email.strip().lower()
        with self._store.transaction() as txn:
            row = (
                txn.conn.execute(select(*_PUBLIC_COLUMNS).where(customers.c.email == email))
                .mappings()
                .first()
            )
            if row is None:
                return None
            txn.conn.execute(
                update(customers)
                .where(customers.c.email == email)
                .values(remember_me_serial=serial, remember_me_token=token)
            )
        return dict(row)

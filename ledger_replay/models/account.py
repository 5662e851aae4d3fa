"""Account model for the ledger."""

from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal, Inexact, Rounded, localcontext
from typing import Iterator

from ledger_replay.exceptions import (
    AccountLockedError,
    BalanceOverflowError,
    InsufficientFundsError,
)
from ledger_replay.money import LEDGER_CONTEXT, ZERO


@dataclass(frozen=True)
class AccountSnapshot:
    """Read-only copy of an account's balances."""

    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@dataclass
class Account:
    """Per-client balance state.

    ``total`` is always ``available + held``. Every operation either
    commits all of its changes or raises an ``AccountError`` and commits
    nothing. Once a chargeback locks the account every further operation
    raises ``AccountLockedError``. Balances never lose digits: an operation
    whose result cannot be held exactly raises ``BalanceOverflowError``.
    """

    client_id: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    locked: bool = False

    @property
    def total(self) -> Decimal:
        with localcontext(LEDGER_CONTEXT):
            return self.available + self.held

    def _ensure_unlocked(self, action: str) -> None:
        if self.locked:
            raise AccountLockedError(self.client_id, f"locked, unable to {action}")

    @contextmanager
    def _exact(self, action: str) -> Iterator[None]:
        try:
            with localcontext(LEDGER_CONTEXT):
                yield
        except (Inexact, Rounded) as e:
            raise BalanceOverflowError(
                self.client_id, f"balance out of range, unable to {action}"
            ) from e

    def _commit(self, available: Decimal, held: Decimal) -> None:
        # total must stay exact as well
        LEDGER_CONTEXT.add(available, held)
        self.available = available
        self.held = held

    def deposit(self, amount: Decimal) -> None:
        """Credit ``amount`` to available funds."""
        self._ensure_unlocked("deposit")
        with self._exact("deposit"):
            self._commit(self.available + amount, self.held)

    def withdraw(self, amount: Decimal, allow_zero_balance: bool = False) -> None:
        """Debit ``amount`` from available funds.

        A withdrawal that would leave exactly zero available is rejected
        unless ``allow_zero_balance`` is set.
        """
        self._ensure_unlocked("withdraw")
        with self._exact("withdraw"):
            remaining = self.available - amount
            if remaining < 0 or (remaining == 0 and not allow_zero_balance):
                raise InsufficientFundsError(
                    self.client_id,
                    f"available {self.available} does not cover withdrawal of {amount}",
                )
            self._commit(remaining, self.held)

    def hold_for_dispute(self, amount: Decimal) -> None:
        """Move ``amount`` from available to held."""
        self._ensure_unlocked("raise dispute")
        if self.available < amount:
            raise InsufficientFundsError(
                self.client_id,
                f"available {self.available} does not cover dispute of {amount}",
            )
        with self._exact("raise dispute"):
            self._commit(self.available - amount, self.held + amount)

    def release_dispute(self, amount: Decimal) -> None:
        """Move ``amount`` from held back to available."""
        self._ensure_unlocked("resolve dispute")
        if self.held < amount:
            raise InsufficientFundsError(
                self.client_id, f"held {self.held} does not cover release of {amount}"
            )
        with self._exact("resolve dispute"):
            self._commit(self.available + amount, self.held - amount)

    def chargeback(self, amount: Decimal) -> None:
        """Remove ``amount`` from held funds and lock the account."""
        self._ensure_unlocked("charge back")
        if self.held < amount:
            raise InsufficientFundsError(
                self.client_id, f"held {self.held} does not cover chargeback of {amount}"
            )
        with self._exact("charge back"):
            self._commit(self.available, self.held - amount)
        self.locked = True

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )

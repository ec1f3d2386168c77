"""Balance posting primitive and the retry runner around units of work."""

import logging
import time
from decimal import Decimal
from typing import Callable, Iterable, Optional, TypeVar

from finledger.config.settings import get_settings
from finledger.core.exceptions import ConflictError, NotFoundError
from finledger.core.money import ZERO
from finledger.domain.models import Account, BalanceEffect
from finledger.repositories.protocols import UnitOfWork, UnitOfWorkFactory

logger = logging.getLogger(__name__)

T = TypeVar("T")


def lock_accounts(uow: UnitOfWork, account_ids: Iterable[str]) -> dict[str, Account]:
    """Lock accounts in ascending id order; NotFoundError if any has disappeared."""
    wanted = sorted(set(account_ids))
    locked = uow.accounts.lock(wanted)
    for account_id in wanted:
        if account_id not in locked:
            raise NotFoundError("Account", account_id)
    return locked


def post_effects(
    uow: UnitOfWork,
    effects: Iterable[BalanceEffect],
    locked: Optional[dict[str, Account]] = None,
) -> dict[str, Account]:
    """
    Apply signed balance deltas atomically inside uow.

    Deltas on the same account are netted first, then each account is
    written once with a version check. Accounts already locked by the
    caller may be passed in to avoid a second lock round.

    Returns the accounts with their new balances.
    """
    deltas: dict[str, Decimal] = {}
    for effect in effects:
        deltas[effect.account_id] = deltas.get(effect.account_id, ZERO) + effect.delta

    if locked is None:
        locked = lock_accounts(uow, deltas.keys())
    missing = [account_id for account_id in deltas if account_id not in locked]
    if missing:
        raise NotFoundError("Account", missing[0])

    updated: dict[str, Account] = {}
    for account_id in sorted(deltas):
        account = locked[account_id]
        new_balance = account.balance + deltas[account_id]
        new_version = uow.accounts.set_balance(account_id, new_balance, account.version)
        account.balance = new_balance
        account.version = new_version
        updated[account_id] = account
        logger.debug("Posted %s to account %s (balance %s)", deltas[account_id], account_id, new_balance)
    return updated


def run_atomic(
    uow_factory: UnitOfWorkFactory,
    work: Callable[[UnitOfWork], T],
    retries: Optional[int] = None,
    backoff_seconds: Optional[float] = None,
) -> T:
    """
    Run work in a fresh write unit of work and commit it.

    ConflictError (version mismatch, busy database, serialization failure)
    restarts the whole unit up to `retries` more times with a linear
    back-off; both default to the configured values. Any other error
    propagates after rollback.
    """
    settings = get_settings()
    if retries is None:
        retries = settings.conflict_retries
    if backoff_seconds is None:
        backoff_seconds = settings.conflict_backoff_seconds

    attempt = 0
    while True:
        try:
            with uow_factory() as uow:
                result = work(uow)
                uow.commit()
                return result
        except ConflictError as exc:
            if attempt >= retries:
                logger.warning("Giving up after %d attempts: %s", attempt + 1, exc.message)
                raise
            attempt += 1
            logger.warning("Conflict on attempt %d, retrying: %s", attempt, exc.message)
            time.sleep(backoff_seconds * attempt)


def run_read(uow_factory: UnitOfWorkFactory, work: Callable[[UnitOfWork], T]) -> T:
    """Run work against one read-only snapshot."""
    with uow_factory(read_only=True) as uow:
        result = work(uow)
        uow.commit()
        return result

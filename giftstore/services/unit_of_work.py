"""
Transaction scope shared by the write paths of every service
"""
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from giftstore.services.exceptions import StoreError, TransactionFailureError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(
    db: Session,
    action: str,
    on_conflict: Optional[Callable[[IntegrityError], StoreError]] = None
) -> Iterator[Session]:
    """
    Run the block as one all-or-nothing transaction

    Commits when the block finishes; any exception rolls back every statement
    issued inside it. Store errors surface as TransactionFailureError unless
    `on_conflict` maps an integrity violation to a domain error. Nothing is
    retried here.
    """
    try:
        yield db
        db.commit()
    except StoreError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        if on_conflict is not None:
            raise on_conflict(exc) from exc
        logger.error("Integrity error while trying to %s: %s", action, exc.orig)
        raise TransactionFailureError(f"Failed to {action}") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Database error while trying to %s: %s", action, exc)
        raise TransactionFailureError(f"Failed to {action}") from exc
    except BaseException:
        db.rollback()
        raise

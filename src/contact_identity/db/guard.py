"""Translate driver and SQLAlchemy failures into identity errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import exc as sa_exc

from contact_identity.errors import IdentityError, StoreUnavailable, TransactionFailure


@contextmanager
def store_errors() -> Iterator[None]:
    """Re-raise store failures as ``StoreUnavailable`` or ``TransactionFailure``.

    Wrap the ``session.begin()`` block so the rollback has already happened
    by the time the error is translated.  Identity errors pass through.
    """
    try:
        yield
    except IdentityError:
        raise
    except (sa_exc.OperationalError, sa_exc.InterfaceError) as e:
        raise StoreUnavailable(meta={"error": type(e.orig or e).__name__}) from e
    except sa_exc.DBAPIError as e:
        if e.connection_invalidated:
            raise StoreUnavailable(meta={"error": type(e.orig or e).__name__}) from e
        raise TransactionFailure(meta={"error": type(e.orig or e).__name__}) from e
    except sa_exc.SQLAlchemyError as e:
        raise TransactionFailure(meta={"error": type(e).__name__}) from e
    except OSError as e:
        raise StoreUnavailable(meta={"error": type(e).__name__}) from e

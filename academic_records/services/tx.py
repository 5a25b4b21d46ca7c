import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError

from ..errors import StoreConflict
from ..extensions import db

log = logging.getLogger("academic_records.tx")

_DEPTH_KEY = "atomic_depth"


@contextmanager
def atomic():
    """Run the enclosed block as one transaction on the request session.

    Nested blocks join the outermost one; only the outermost commits. Any
    exception rolls the whole transaction back. Constraint violations and
    lock/serialization failures coming from the store surface as
    ``StoreConflict``.
    """
    session = db.session
    info = session.info
    if info.get(_DEPTH_KEY, 0) > 0:
        info[_DEPTH_KEY] += 1
        try:
            yield session
        finally:
            info[_DEPTH_KEY] -= 1
        return

    info[_DEPTH_KEY] = 1
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        log.warning("constraint violation, transaction rolled back: %s", exc.orig)
        raise StoreConflict("The record was changed concurrently, try again") from exc
    except OperationalError as exc:
        session.rollback()
        log.warning("store conflict, transaction rolled back: %s", exc.orig)
        raise StoreConflict("The store could not complete the transaction") from exc
    except Exception:
        session.rollback()
        raise
    finally:
        info[_DEPTH_KEY] = 0

import logging
from contextlib import contextmanager
from pagebuilder.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def transactional(session=None):
    """
    Commit the session when the block succeeds; roll back and re-raise
    otherwise. Nothing is left half-written on a failed layout save.
    """
    session = session or db.session
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.debug("transaction rolled back", exc_info=True)
        raise

from contextlib import contextmanager
import logging
from sqlalchemy.exc import SQLAlchemyError
from models import db
from app.exceptions import PersistenceError


@contextmanager
def transactional(message="DB transaction failed"):
    """Commit on success; roll back and raise PersistenceError on DB failure."""
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise PersistenceError(message) from e
    except Exception as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from taskmaster.extensions import db
from taskmaster.models import User

logger = logging.getLogger(__name__)


def _find_user(username: str) -> Optional[User]:
    return User.query.filter_by(username=username).first()


def get_or_create_user(username) -> Optional[int]:
    """Return the id for username, creating the user on first sight.

    Returns None when the username is blank or the store fails; callers report
    that as a server error.
    """
    username = (username or "").strip()
    if not username:
        logger.warning("Attempt to get/create user with empty username")
        return None
    try:
        user = _find_user(username)
        if user is None:
            try:
                user = User(username=username)
                db.session.add(user)
                db.session.flush()
            except IntegrityError:
                # A concurrent request inserted the same username first. End this
                # transaction so the re-read is not served from its snapshot.
                db.session.rollback()
                user = _find_user(username)
                if user is None:
                    raise
            else:
                logger.info("Created user %r (id=%s)", username, user.id)
        user_id = user.id
        db.session.commit()
        return user_id
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("User get/create failed for username %r", username)
        return None

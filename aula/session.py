# session.py

import logging
from typing import Callable, Optional

from . import database
from .models import User

logger = logging.getLogger(__name__)


class Session:
    """
    The logged-in user, handed explicitly to every screen that needs it.
    """

    def __init__(self, user: Optional[User] = None):
        self.user = user

    def login(self, user: User):
        self.user = user

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None

    @property
    def is_teacher(self) -> bool:
        return self.user is not None and self.user.is_teacher

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user else None


def start_session(user_id: Optional[int] = None,
                  lookup_user: Optional[Callable[[int], Optional[User]]] = None) -> Session:
    """Session for the launcher: logged in as ``user_id`` when that user exists."""
    lookup_user = lookup_user or database.get_user_by_id
    session = Session()
    if user_id is not None:
        user = lookup_user(user_id)
        if user is None:
            logger.warning("User %s not found, continuing without login", user_id)
        else:
            session.login(user)

    if session.is_logged_in:
        logger.info("Logged in as %s (%s)", session.user.name, session.user.role)
    else:
        logger.info("No user logged in, browsing as student")
    return session

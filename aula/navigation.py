# navigation.py

import logging
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from .models import STUDENT, TEACHER, User
from .session import Session

logger = logging.getLogger(__name__)

# Destinations the host window knows how to show
MY_ITEMS = "my_items"                      # the logged-in teacher's own list
OWNER_ITEMS = "owner_items"                # the list of the teacher who owns the record
TEACHERS_DIRECTORY = "teachers_directory"  # cards of all teachers

# (role, is_owner) -> (destination, fallback when the owner is unknown, back label)
BACK_ROUTES: Dict[Tuple[str, bool], Tuple[str, str, str]] = {
    (TEACHER, True): (MY_ITEMS, MY_ITEMS, "Back to My {plural}"),
    (TEACHER, False): (OWNER_ITEMS, MY_ITEMS, "Back to Teacher's {plural}"),
    (STUDENT, False): (OWNER_ITEMS, TEACHERS_DIRECTORY, "Back to {plural}"),
}


class BackRoute(NamedTuple):
    destination: str
    owner: Optional[User]
    label: str


def route_key(session: Session, owner_id: int) -> Tuple[str, bool]:
    # Anonymous sessions browse like students
    if not session.is_teacher:
        return STUDENT, False
    return TEACHER, owner_id > 0 and owner_id == session.user_id


def back_label(session: Session, owner_id: int, plural: str) -> str:
    return BACK_ROUTES[route_key(session, owner_id)][2].format(plural=plural)


def resolve_back_route(session: Session, owner_id: int, plural: str,
                       lookup_user: Callable[[int], Optional[User]]) -> BackRoute:
    """
    Picks the screen the viewer returns to.

    ``lookup_user`` finds the owning teacher; when there is no owner id or the
    owner no longer exists the table's fallback destination is used.
    """
    destination, fallback, label = BACK_ROUTES[route_key(session, owner_id)]
    label = label.format(plural=plural)
    if destination != OWNER_ITEMS:
        return BackRoute(destination, None, label)

    owner = lookup_user(owner_id) if owner_id > 0 else None
    if owner is None:
        logger.info("Owner %s not found, going back to %s", owner_id, fallback)
        return BackRoute(fallback, None, label)
    return BackRoute(destination, owner, label)

from ..services.exceptions import PermissionDeniedError


def is_owner_or_admin(actor, owner_id: int) -> bool:
    """True when the actor owns the resource or holds the admin role"""
    return actor is not None and (actor.id == owner_id or actor.is_admin)


def ensure_owner_or_admin(
    actor, owner_id: int, message: str = "Not authorized to access this resource"
) -> None:
    """Raise PermissionDeniedError unless the actor owns the resource or is admin"""
    if not is_owner_or_admin(actor, owner_id):
        raise PermissionDeniedError(message)


def ensure_event_manager(
    actor, event, message: str = "Only the event organizer or an admin can do this"
) -> None:
    ensure_owner_or_admin(actor, event.organizer_id, message)


def ensure_admin(actor, message: str = "Admin access required") -> None:
    if actor is None or not actor.is_admin:
        raise PermissionDeniedError(message)


def ensure_can_view_event(actor, event) -> None:
    """Non-public events are visible only to their organizer and admins"""
    if event.is_public:
        return
    ensure_owner_or_admin(actor, event.organizer_id, "This event is not public")

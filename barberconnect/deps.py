# barberconnect/deps.py

import logging

from .errors import Forbidden

logger = logging.getLogger(__name__)

# action -> which relation to the resource grants it
CUSTOMER_ACTIONS = {
    "appointment:cancel",
    "payment:create_order",
    "payment:verify",
    "payment:simulate",
    "review:create",
    "review:update",
    "review:delete",
}
BARBER_ACTIONS = {
    "appointment:update_status",
    "profile:update",
    "profile:delete",
}
PARTICIPANT_ACTIONS = {
    "appointment:view",
    "payment:view",
}
ADMIN_ACTIONS = {
    "appointment:view",
    "payment:view",
    "review:delete",
    "user:view",
}
# the resource is the user record itself
SELF_ACTIONS = {
    "user:view",
}

DENIED_MESSAGES = {
    "appointment:view": "Not authorized to view this appointment",
    "appointment:update_status": "Not authorized to update this appointment",
    "appointment:cancel": "Not authorized to cancel this appointment",
    "payment:create_order": "Not authorized to pay for this appointment",
    "payment:verify": "Not authorized to verify payment for this appointment",
    "payment:simulate": "Not authorized to pay for this appointment",
    "payment:view": "Not authorized to view this payment",
    "review:create": "Not authorized to review this appointment",
    "review:update": "Not authorized to update this review",
    "review:delete": "Not authorized to delete this review",
    "profile:update": "Not authorized to update this profile",
    "profile:delete": "Not authorized to delete this profile",
    "user:view": "Not authorized to view this profile",
}


def require_role(user: dict, role: str):
    if user["role"] != role:
        raise Forbidden("Forbidden")


def _owner_ids(resource) -> tuple:
    customer_id = getattr(resource, "customer_id", None)
    # barber profiles are owned through user_id
    barber_id = getattr(resource, "barber_id", None) or getattr(resource, "user_id", None)
    return customer_id, barber_id


def can(user: dict, resource, action: str) -> bool:
    customer_id, barber_id = _owner_ids(resource)
    role = user["role"]

    if role == "admin" and action in ADMIN_ACTIONS:
        return True
    if action in CUSTOMER_ACTIONS:
        return role == "customer" and customer_id == user["id"]
    if action in BARBER_ACTIONS:
        return role == "barber" and barber_id == user["id"]
    if action in PARTICIPANT_ACTIONS:
        return user["id"] in (customer_id, barber_id)
    if action in SELF_ACTIONS:
        return getattr(resource, "id", None) == user["id"]
    return False


def authorize(user: dict, resource, action: str):
    """Raise Forbidden unless ``user`` may perform ``action`` on ``resource``."""
    if not can(user, resource, action):
        logger.warning(
            f"Denied {action} for user {user['id']} ({user['role']}) on "
            f"{type(resource).__name__} {getattr(resource, 'id', None)}"
        )
        raise Forbidden(DENIED_MESSAGES.get(action, "Forbidden"))

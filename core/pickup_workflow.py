"""
Pickup / delivery status progression.

Each kind of trip walks its own linear sequence of statuses:

    pickup:   pending -> assigned -> enroute -> arrived -> picked -> completed
    delivery: pending -> assigned -> transit -> completed

`next_status` is total: a terminal status, or any value that is not part of
the kind's sequence, is returned unchanged.
"""
import enum
from typing import Dict, Tuple


class DeliveryKind(str, enum.Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class PickupStatus(str, enum.Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    ENROUTE = "enroute"
    ARRIVED = "arrived"
    PICKED = "picked"
    TRANSIT = "transit"
    COMPLETED = "completed"


STATUS_SEQUENCES: Dict[DeliveryKind, Tuple[str, ...]] = {
    DeliveryKind.PICKUP: (
        PickupStatus.PENDING.value,
        PickupStatus.ASSIGNED.value,
        PickupStatus.ENROUTE.value,
        PickupStatus.ARRIVED.value,
        PickupStatus.PICKED.value,
        PickupStatus.COMPLETED.value,
    ),
    DeliveryKind.DELIVERY: (
        PickupStatus.PENDING.value,
        PickupStatus.ASSIGNED.value,
        PickupStatus.TRANSIT.value,
        PickupStatus.COMPLETED.value,
    ),
}

TERMINAL_STATUS = PickupStatus.COMPLETED.value

STATUS_LABELS: Dict[str, str] = {
    "pending": "Pending",
    "assigned": "Assigned",
    "enroute": "En route",
    "arrived": "Arrived",
    "picked": "Picked up",
    "transit": "In transit",
    "completed": "Completed",
}

# (kind, status) -> following status
_NEXT: Dict[Tuple[DeliveryKind, str], str] = {
    (kind, current): following
    for kind, sequence in STATUS_SEQUENCES.items()
    for current, following in zip(sequence, sequence[1:])
}


def _as_kind(kind) -> DeliveryKind:
    return kind if isinstance(kind, DeliveryKind) else DeliveryKind(str(kind))


def _as_value(status) -> str:
    return status.value if isinstance(status, enum.Enum) else status


def statuses_for(kind) -> Tuple[str, ...]:
    """Ordered statuses a record of this kind may hold."""
    return STATUS_SEQUENCES[_as_kind(kind)]


def is_valid_status(status, kind) -> bool:
    try:
        return _as_value(status) in statuses_for(kind)
    except ValueError:
        return False


def is_terminal(status, kind) -> bool:
    return is_valid_status(status, kind) and _as_value(status) == TERMINAL_STATUS


def next_status(current, kind):
    """
    Return the status that follows `current` for a trip of `kind`.

    Terminal and unrecognised statuses (and unknown kinds) come back unchanged.
    """
    try:
        resolved_kind = _as_kind(kind)
    except ValueError:
        return current
    following = _NEXT.get((resolved_kind, _as_value(current)))
    return following if following is not None else current


def status_label(status) -> str:
    value = _as_value(status)
    return STATUS_LABELS.get(value, value)

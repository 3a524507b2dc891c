"""
Processing stages of a laundry order and the order status they imply.

    reception -> sorting -> washing -> drying -> ironing -> packing -> ready -> picked

While an order sits at reception waiting to be tagged it is `pending`; the
washing floor stages read as `processing`; `ready` and `picked` map to
`ready` and `completed`. A cancelled order stays cancelled whatever its stage.
"""
import enum
from typing import Dict, Optional

from models.order import OrderStatus


class OrderStage(str, enum.Enum):
    RECEPTION = "reception"
    SORTING = "sorting"
    WASHING = "washing"
    DRYING = "drying"
    IRONING = "ironing"
    PACKING = "packing"
    READY = "ready"
    PICKED = "picked"


class TaggingStatus(str, enum.Enum):
    PENDING = "pending"
    DONE = "done"


STAGE_STATUS: Dict[str, str] = {
    OrderStage.SORTING.value: OrderStatus.PROCESSING.value,
    OrderStage.WASHING.value: OrderStatus.PROCESSING.value,
    OrderStage.DRYING.value: OrderStatus.PROCESSING.value,
    OrderStage.IRONING.value: OrderStatus.PROCESSING.value,
    OrderStage.PACKING.value: OrderStatus.PROCESSING.value,
    OrderStage.READY.value: OrderStatus.READY.value,
    OrderStage.PICKED.value: OrderStatus.COMPLETED.value,
}

# order fields the derived status depends on
WORKFLOW_FIELDS = frozenset({"current_stage", "tagging_required", "tagging_status"})


def _value(value):
    return value.value if isinstance(value, enum.Enum) else value


def order_status_from_stage(
    stage: Optional[str],
    status: Optional[str] = None,
    tagging_required: bool = False,
    tagging_status: Optional[str] = None
) -> str:
    """
    Order status implied by the processing stage and the tagging state.

    An unknown stage keeps the current status (or `pending` when there is none).
    """
    stage = _value(stage) or OrderStage.RECEPTION.value
    status = _value(status)
    tagging_status = _value(tagging_status)

    if status == OrderStatus.CANCELLED.value:
        return OrderStatus.CANCELLED.value

    untagged = tagging_status == TaggingStatus.PENDING.value
    if tagging_required and untagged:
        return OrderStatus.PENDING.value

    if stage == OrderStage.RECEPTION.value:
        return OrderStatus.PENDING.value if untagged else OrderStatus.PROCESSING.value

    return STAGE_STATUS.get(stage, status or OrderStatus.PENDING.value)

from __future__ import annotations

from app.core.errors import ValidationError, ensure_member
from app.db.models.picking import PicklistItemStatus, PicklistStatus, ShortPickReason

P = PicklistStatus

PICKLIST_TRANSITIONS: dict[PicklistStatus, frozenset[PicklistStatus]] = {
    P.NOT_STARTED: frozenset({P.IN_PROGRESS}),
    P.IN_PROGRESS: frozenset({P.PAUSED, P.COMPLETED}),
    P.PAUSED: frozenset({P.IN_PROGRESS, P.COMPLETED}),
    P.COMPLETED: frozenset(),
}


def check_picklist_transition(current: str, new: str) -> str:
    new = ensure_member(PicklistStatus, new, "status")
    cur = PicklistStatus(current)
    if PicklistStatus(new) != cur and PicklistStatus(new) not in PICKLIST_TRANSITIONS[cur]:
        allowed = ", ".join(sorted(s.value for s in PICKLIST_TRANSITIONS[cur])) or "none"
        raise ValidationError(
            f"Cannot move picklist from '{current}' to '{new}' (allowed: {allowed})",
            field="status",
        )
    return new


def resolve_item_update(current_reason: str | None, changes: dict) -> dict:
    """Work out the fields to write for a picklist item update.

    ``changes`` may hold ``picked_qty``, ``status`` and ``short_pick_reason``.
    A reason only goes with status Short, and sending a reason alone marks the
    item Short. Clearing the reason puts the item back to Pending, even when
    the full quantity was picked. Short always needs a reason.
    """
    out: dict = {}

    if "picked_qty" in changes:
        qty = changes["picked_qty"]
        if qty is None or int(qty) < 0:
            raise ValidationError("Picked quantity must be a non-negative integer", field="pickedQty")
        out["picked_qty"] = int(qty)

    status = None
    if "status" in changes:
        if changes["status"] is None:
            raise ValidationError("status cannot be null", field="status")
        status = ensure_member(PicklistItemStatus, changes["status"], "status")

    if "short_pick_reason" in changes:
        reason = changes["short_pick_reason"]
        if reason is None:
            if status == PicklistItemStatus.SHORT.value:
                raise ValidationError("Short picks need a reason", field="shortPickReason")
            out["short_pick_reason"] = None
            out["status"] = status or PicklistItemStatus.PENDING.value
        else:
            reason = ensure_member(ShortPickReason, reason, "shortPickReason")
            if status is not None and status != PicklistItemStatus.SHORT.value:
                raise ValidationError("A short pick reason is only allowed with status Short", field="shortPickReason")
            out["short_pick_reason"] = reason
            out["status"] = PicklistItemStatus.SHORT.value
    elif status is not None:
        if status == PicklistItemStatus.SHORT.value:
            if not current_reason:
                raise ValidationError("Short picks need a reason", field="shortPickReason")
        else:
            out["short_pick_reason"] = None
        out["status"] = status

    return out

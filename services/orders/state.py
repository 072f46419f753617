from __future__ import annotations

from app.core.errors import ValidationError, ensure_member
from app.db.models.orders import OrderStatus

S = OrderStatus

ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    S.PENDING: frozenset({S.IN_PROCESS, S.BREACHED}),
    S.IN_PROCESS: frozenset({S.BREACHED, S.COMPLETED}),
    S.BREACHED: frozenset({S.IN_PROCESS, S.COMPLETED}),
    S.COMPLETED: frozenset({S.DISPATCHED}),
    S.DISPATCHED: frozenset(),
}

# (timestamp attribute, stage name), walked in order by advance
MILESTONES: list[tuple[str, str]] = [
    ("picked_at", "picked"),
    ("packed_at", "packed"),
    ("manifested_at", "manifested"),
    ("dispatched_at", "dispatched"),
]

# status an order moves to when a stage is stamped, keyed by the statuses it moves from
STAGE_STATUS: dict[str, tuple[frozenset[OrderStatus], OrderStatus]] = {
    "picked": (frozenset({S.PENDING}), S.IN_PROCESS),
    "manifested": (frozenset({S.IN_PROCESS, S.BREACHED}), S.COMPLETED),
    "dispatched": (frozenset({S.COMPLETED}), S.DISPATCHED),
}


def can_transition(current: str, new: str) -> bool:
    cur, nxt = OrderStatus(current), OrderStatus(new)
    return cur == nxt or nxt in ORDER_TRANSITIONS[cur]


def check_transition(current: str, new: str) -> str:
    """Validate ``current -> new``; returns the normalized new status."""
    new = ensure_member(OrderStatus, new, "status")
    if not can_transition(current, new):
        allowed = ", ".join(sorted(s.value for s in ORDER_TRANSITIONS[OrderStatus(current)])) or "none"
        raise ValidationError(
            f"Cannot move order from '{current}' to '{new}' (allowed: {allowed})",
            field="status",
        )
    return new


def next_stage(order) -> tuple[str, str] | None:
    for attr, stage in MILESTONES:
        if getattr(order, attr) is None:
            return attr, stage
    return None


def status_after_stage(current: str, stage: str) -> str:
    rule = STAGE_STATUS.get(stage)
    if rule is None:
        return current
    sources, target = rule
    if OrderStatus(current) in sources:
        return target.value
    return current

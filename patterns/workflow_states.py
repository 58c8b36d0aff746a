"""Enum-based workflow state machine pattern.

Defines the purchase flow as a Python enum with explicit transition
validation. Each stage may only advance to the next stage or drop to
FAILED; CONFIRMED and FAILED are terminal.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# State definitions
# ---------------------------------------------------------------------------

class PurchaseState(str, Enum):
    """Purchase workflow states."""

    SEARCH_VALIDATION = "search_validation"
    CART_ADD = "cart_add"
    PRICE_CALC = "price_calc"
    PAYMENT = "payment"
    INVENTORY_COMMIT = "inventory_commit"
    CONFIRMED = "confirmed"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Transition rules
# ---------------------------------------------------------------------------

# Allowed transitions: {current_state: [allowed_next_states]}
_PURCHASE_TRANSITIONS: dict[PurchaseState, list[PurchaseState]] = {
    PurchaseState.SEARCH_VALIDATION: [PurchaseState.CART_ADD, PurchaseState.FAILED],
    PurchaseState.CART_ADD: [PurchaseState.PRICE_CALC, PurchaseState.FAILED],
    PurchaseState.PRICE_CALC: [PurchaseState.PAYMENT, PurchaseState.FAILED],
    PurchaseState.PAYMENT: [PurchaseState.INVENTORY_COMMIT, PurchaseState.FAILED],
    PurchaseState.INVENTORY_COMMIT: [PurchaseState.CONFIRMED, PurchaseState.FAILED],
    PurchaseState.CONFIRMED: [],  # terminal
    PurchaseState.FAILED: [],     # terminal
}


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

@dataclass
class WorkflowTransition:
    """Record of a single state transition."""

    from_state: str
    to_state: str
    timestamp: datetime
    actor: str = "system"
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class PurchaseWorkflow:
    """A running purchase with state tracking.

    Usage::

        wf = PurchaseWorkflow(workflow_id="purchase-1")
        wf.transition(PurchaseState.CART_ADD)
        wf.fail("Payment failed")
    """

    workflow_id: str
    current_state: PurchaseState = PurchaseState.SEARCH_VALIDATION
    history: list[WorkflowTransition] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def can_transition(self, to_state: PurchaseState) -> bool:
        """Check if a transition is allowed from the current state."""
        allowed = _PURCHASE_TRANSITIONS.get(self.current_state, [])
        return to_state in allowed

    def transition(
        self,
        to_state: PurchaseState,
        actor: str = "system",
        metadata: dict[str, Any] | None = None,
    ) -> WorkflowTransition:
        """Execute a state transition.

        Raises ValueError if the transition is not allowed.
        """
        if not self.can_transition(to_state):
            allowed = _PURCHASE_TRANSITIONS.get(self.current_state, [])
            allowed_names = [s.value for s in allowed]
            raise ValueError(
                f"Cannot transition from {self.current_state.value} to {to_state.value}. "
                f"Allowed: {allowed_names}"
            )

        record = WorkflowTransition(
            from_state=self.current_state.value,
            to_state=to_state.value,
            timestamp=datetime.now(timezone.utc),
            actor=actor,
            metadata=metadata or {},
        )
        self.history.append(record)
        self.current_state = to_state
        return record

    def fail(self, reason: str) -> PurchaseState:
        """Move to FAILED and return the state the flow stopped in."""
        failed_at = self.current_state
        self.transition(PurchaseState.FAILED, metadata={"reason": reason})
        return failed_at

    @property
    def is_terminal(self) -> bool:
        """Check if the workflow is in a terminal state."""
        return len(_PURCHASE_TRANSITIONS.get(self.current_state, [])) == 0

    @property
    def visited_states(self) -> list[str]:
        """Every state entered, starting with the initial one."""
        if not self.history:
            return [self.current_state.value]
        return [self.history[0].from_state] + [t.to_state for t in self.history]

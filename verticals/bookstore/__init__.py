"""Bookstore vertical — in-memory checkout.

Search, cart, pricing, simulated payment, inventory and purchase
orchestration built from the shared patterns:
- Frozen pydantic snapshots for every returned value
- In-memory store with reset for isolation
- Pure-function rules for quantity, stock and selection checks
- Enum workflow state machine driving the purchase
- Dataclass configuration for tax, coupons and shipping
- Template engine renderer for receipts
"""

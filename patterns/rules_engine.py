"""Pure-function rules engine pattern.

Rules are stateless functions: (entity, context) -> RuleResult.
No store access, no side effects. Cart and inventory code evaluate these
and decide which exception to raise from the failed results.
"""

from dataclasses import dataclass, field
from typing import Any, Sequence


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0

    @property
    def first_failure(self) -> RuleResult | None:
        return self.failed[0] if self.failed else None


# ---------------------------------------------------------------------------
# Bookstore rules
# ---------------------------------------------------------------------------

def check_positive_quantity(quantity: Any) -> RuleResult:
    """Quantity must be a real ``int`` greater than zero.

    ``bool`` is an ``int`` subclass and is rejected explicitly.
    """
    is_int = isinstance(quantity, int) and not isinstance(quantity, bool)
    passed = is_int and quantity > 0

    return RuleResult(
        passed=passed,
        rule_name="positive_quantity",
        message=(
            "Quantity accepted"
            if passed
            else "Quantity must be a positive integer"
        ),
        details={"quantity": quantity},
    )


def check_stock_availability(
    title: str,
    available: int,
    quantity: int,
    already_reserved: int = 0,
) -> RuleResult:
    """Check that ``already_reserved + quantity`` fits in ``available``."""
    requested = already_reserved + quantity
    passed = available >= requested

    return RuleResult(
        passed=passed,
        rule_name="stock_availability",
        message=(
            f"In stock: {available} available"
            if passed
            else f"Requested quantity exceeds stock for {title}: "
                 f"{available} available, {requested} requested"
        ),
        details={"title": title, "available": available, "requested": requested},
    )


def check_selection_in_results(book_id: Any, result_ids: Sequence[Any]) -> RuleResult:
    """Check that a selected book id still appears in fresh search results."""
    if not result_ids:
        return RuleResult(
            passed=False,
            rule_name="selection_in_results",
            message="No books found matching your search",
            details={"book_id": book_id, "result_count": 0},
        )

    passed = book_id in result_ids
    return RuleResult(
        passed=passed,
        rule_name="selection_in_results",
        message=(
            "Selection matches search results"
            if passed
            else "Selected book does not match search results"
        ),
        details={"book_id": book_id, "result_count": len(result_ids)},
    )


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*rules: RuleResult) -> RuleSetResult:
    """Compose multiple rule results into a single aggregate.

    Example::

        result = evaluate_rules(
            check_positive_quantity(qty),
            check_stock_availability(book.title, book.stock, qty),
        )
        if not result.all_passed:
            raise ...
    """
    return RuleSetResult(
        all_passed=all(r.passed for r in rules),
        results=list(rules),
    )

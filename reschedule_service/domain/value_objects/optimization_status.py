"""
Route optimization status value object.
"""

from enum import Enum


class RouteOptimizationStatus(str, Enum):
    """Route optimization lifecycle status enumeration.

    pending_approval -> applied | declined | awaiting_customer
    awaiting_customer -> applied | declined
    """

    PENDING_APPROVAL = "pending_approval"
    AWAITING_CUSTOMER = "awaiting_customer"
    APPLIED = "applied"
    DECLINED = "declined"

    def is_final(self) -> bool:
        """Check if status is terminal."""
        return self in [self.APPLIED, self.DECLINED]

    def is_active(self) -> bool:
        """Check if the optimization still awaits a decision."""
        return not self.is_final()

    def allowed_transitions(self) -> frozenset:
        """Statuses reachable from this one."""
        return _TRANSITIONS[self]

    def can_transition_to(self, target: "RouteOptimizationStatus") -> bool:
        """Check if moving to ``target`` is a legal transition."""
        return target in _TRANSITIONS[self]

    @classmethod
    def active_statuses(cls) -> list:
        return [cls.PENDING_APPROVAL, cls.AWAITING_CUSTOMER]


_TRANSITIONS = {
    RouteOptimizationStatus.PENDING_APPROVAL: frozenset(
        {
            RouteOptimizationStatus.APPLIED,
            RouteOptimizationStatus.DECLINED,
            RouteOptimizationStatus.AWAITING_CUSTOMER,
        }
    ),
    RouteOptimizationStatus.AWAITING_CUSTOMER: frozenset(
        {RouteOptimizationStatus.APPLIED, RouteOptimizationStatus.DECLINED}
    ),
    RouteOptimizationStatus.APPLIED: frozenset(),
    RouteOptimizationStatus.DECLINED: frozenset(),
}

"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as writing into a closed period."""


def goal_not_found(goal_id: int) -> str:
    """Return message for missing saving goal."""
    return f"Saving goal {goal_id} not found"


def period_not_found(period_id: int) -> str:
    """Return message for missing financial period."""
    return f"Financial period {period_id} not found"


def period_closed(period_id: int) -> str:
    """Return message when a closed period receives a transaction."""
    return f"Financial period {period_id} is closed and accepts no more transactions"


def sub_goal_exceeds_parent(sub_goal_name: str, target: object, parent_target: object) -> str:
    """Return message for a sub-goal larger than its parent goal."""
    return (
        f"Sub-goal '{sub_goal_name}' target {target} exceeds "
        f"the goal target {parent_target}"
    )

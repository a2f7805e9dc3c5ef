"""Deterministic commit policy.

Decides whether an asynchronous result may be written to shared state
and which errors a success is allowed to clear.
"""

from __future__ import annotations

from aqsync.state.events import FetchCategory


def should_commit(
    *,
    category: FetchCategory,
    issued_generation: int | None,
    current_generation: int,
) -> bool:
    """Accept a result only if the selection it was issued for is still current.

    Registry results are not tied to a selection and always commit.
    """
    if category is FetchCategory.REGISTRY or issued_generation is None:
        return True
    return issued_generation == current_generation


def clears_error(*, error_category: FetchCategory | None, success_category: FetchCategory) -> bool:
    """A success clears the error banner only when it reports the same category."""
    return error_category is not None and error_category == success_category

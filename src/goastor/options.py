#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the inspector.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy instead of mutating an instance.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class InspectorOptions(CloneFrozenMixin):
    """Options controlling how an Inspector walks a tree.

    Parameters
    ----------
    synchronized : bool, default=False
        Serialize every visitor call through a lock held by the inspector.
        This only guards the visit step; interleaving two walks over the same
        inspector from several threads is still not supported.
    check_slot_types : bool, default=True
        Verify that every node written back into a child slot belongs to the
        node family the slot accepts, raising NodeShapeError otherwise.

    """

    synchronized: bool = field(
        default=False,
        metadata={
            "help": "Guard each visitor call with a lock for multi-threaded drivers",
            "importance": "advanced",
        },
    )
    check_slot_types: bool = field(
        default=True,
        metadata={
            "help": "Reject replacements that do not fit the child slot they are written to",
            "importance": "core",
        },
    )


__all__ = ["CloneFrozenMixin", "InspectorOptions"]

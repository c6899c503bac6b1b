from __future__ import annotations

"""
Domain Error Taxonomy.

Invalid arguments are reported with the builtin ValueError at the call
boundary. The classes below cover the failures that describe a problem in
the analyzed codebase or in the snapshot describing it.
"""

from typing import Any, List, Sequence


class ModulescopeError(Exception):
    """Base class for all errors raised by modulescope."""


class AmbiguousAnnotationError(ModulescopeError):
    """
    More than one type in a package carries the requested annotation.

    Attributes:
        package_name: Fully-qualified name of the offending package.
        annotation_kind: Display name of the requested annotation kind.
        candidates: All conflicting annotation values.
    """

    def __init__(self, package_name: str, annotation_kind: str, candidates: Sequence[Any]) -> None:
        self.package_name = package_name
        self.annotation_kind = annotation_kind
        self.candidates: List[Any] = list(candidates)
        super().__init__(
            f"Expected maximum of one type in package {package_name} to be annotated with "
            f"{annotation_kind}, but got {self.candidates}!"
        )


class SnapshotError(ModulescopeError):
    """A class universe snapshot could not be read or is malformed."""

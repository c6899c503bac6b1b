from __future__ import annotations

"""
Namespace Segmenter.

Collapses a fully-qualified package name into the direct child segment
of a base package.
"""

from modulescope.domain.constants import PACKAGE_SEPARATOR


def extract_direct_sub_package(base: str, candidate: str) -> str:
    """
    Return the direct sub-package of base that candidate resides in.

    The candidate must be equal to base or start with base followed by the
    separator. Candidates not shorter than base but outside of it are
    truncated all the same; callers guarantee the precondition.

    Examples:
        ('a.b', 'a.b.c.d') -> 'a.b.c'
        ('a.b', 'a.b.c')   -> 'a.b.c'
        ('a.b', 'a.b')     -> 'a.b'

    Args:
        base: Name of the base package.
        candidate: Name of a package at or below base.

    Returns:
        str: The candidate truncated after its first segment below base.
    """
    if len(candidate) <= len(base):
        return candidate

    end = candidate.find(PACKAGE_SEPARATOR, len(base) + 1)
    return candidate if end == -1 else candidate[:end]

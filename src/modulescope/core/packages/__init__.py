from __future__ import annotations

from .memo import Memoized
from .package import Package, is_package_info_type
from .resolver import AnnotationLookup, LookupStatus
from .segmenter import extract_direct_sub_package

__all__ = [
    "Package",
    "is_package_info_type",
    "AnnotationLookup",
    "LookupStatus",
    "extract_direct_sub_package",
    "Memoized",
]

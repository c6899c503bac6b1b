from __future__ import annotations

from .classes import Classes
from .formatting import abbreviate_type_name, format_relative_name
from .predicates import (
    DescribedPredicate,
    are_package_infos,
    do_not,
    has_modifier,
    has_simple_name,
    is_meta_annotated_with,
    reside_in_a_package,
)
from .reflection import get_merged_annotation

__all__ = [
    "Classes",
    "DescribedPredicate",
    "reside_in_a_package",
    "has_simple_name",
    "is_meta_annotated_with",
    "has_modifier",
    "are_package_infos",
    "do_not",
    "get_merged_annotation",
    "abbreviate_type_name",
    "format_relative_name",
]

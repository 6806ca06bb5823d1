# -------------------------------------
# variant group expansion
# -------------------------------------
"""
Expand variant group class notation into flat class names.

This package provides utilities for:
- Scanning and expanding grouped class tokens (expander)
- Folding expanded names into a class attribute value (classes)
- Loading tokens from YAML class sets and text files (loader)

    >>> from variantgroup import expand
    >>> expand(["text-(center red)", "outline-(~ 2)"])
    ['text-center', 'text-red', 'outline', 'outline-2']
"""

__all__ = [
    # expander
    "ExpandError",
    "UnbalancedGroup",
    "EmptyGroup",
    "expand",
    "expand_token",
    "scan_token",
    "is_grouped",
    # classes
    "Classes",
    "NonLiteralToken",
    "ensure_literal",
    "uno",
    "class_attr",
]

from .expander import (
    ExpandError,
    UnbalancedGroup,
    EmptyGroup,
    expand,
    expand_token,
    scan_token,
    is_grouped,
)
from .classes import Classes, NonLiteralToken, ensure_literal, uno, class_attr

__version__ = "0.1.0"

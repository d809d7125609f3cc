"""
TypeKind Enum

Classifies a parameter annotation for injection
"""

from enum import Enum


class TypeKind(Enum):
    """How a parameter annotation is injected"""
    UNTYPED = "UNTYPED"      # no annotation
    NULLABLE = "NULLABLE"    # Optional[X], X | None: always receives None
    COMPOSITE = "COMPOSITE"  # any other union
    SCALAR = "SCALAR"        # str, int, float, bool: a container variable
    BUILTIN = "BUILTIN"      # list, dict, generics, Any ...: never injected
    CLASS = "CLASS"          # a class, or an unresolved forward reference

from .accessors import FieldAccessor, MappingAccessor, AttributeAccessor, FrameAccessor, as_accessor
from .clumerge import clumerge, merge

__all__ = [
    "FieldAccessor",
    "MappingAccessor",
    "AttributeAccessor",
    "FrameAccessor",
    "as_accessor",
    "clumerge",
    "merge",
]

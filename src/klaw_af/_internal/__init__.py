"""Resolution engine shared by every AsyncAF operation."""

from klaw_af._internal.combinator import gather_with_holes
from klaw_af._internal.context import UNSET, current_context
from klaw_af._internal.resolve import RESOLVERS, parallel, serial, settle_elements
from klaw_af._internal.shape import is_collection, normalize

__all__ = [
    'RESOLVERS',
    'UNSET',
    'current_context',
    'gather_with_holes',
    'is_collection',
    'normalize',
    'parallel',
    'serial',
    'settle_elements',
]

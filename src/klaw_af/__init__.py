"""klaw-af: collection operations over values that may still be pending.

Apply map, filter, search and friends to a collection whose elements (or the
collection itself) are awaitables, without settling them by hand first.

Flat imports (preferred):
    from klaw_af import AsyncAF, Hole, Mode, current_context, TypeMismatchError

Submodule imports (for organization):
    from klaw_af.wrapper import AsyncAF
    from klaw_af.types import CollectionView, Hole, Mode
    from klaw_af._internal import parallel, serial, gather_with_holes
"""

from klaw_af._config import AFConfig, active_config, get_config, init
from klaw_af._internal import (
    UNSET,
    current_context,
    gather_with_holes,
    is_collection,
    normalize,
    parallel,
    serial,
)
from klaw_af._logging import configure_logging, get_logger
from klaw_af.errors import TypeMismatch, TypeMismatchError
from klaw_af.types import CollectionView, Hole, HoleType, Mode
from klaw_af.wrapper import AsyncAF

__all__ = [
    # Config
    'AFConfig',
    # Pipeline
    'AsyncAF',
    # Types
    'CollectionView',
    'Hole',
    'HoleType',
    'Mode',
    # Errors
    'TypeMismatch',
    'TypeMismatchError',
    'UNSET',
    'active_config',
    # Logging
    'configure_logging',
    # Engine
    'current_context',
    'gather_with_holes',
    'get_config',
    'get_logger',
    'init',
    'is_collection',
    'normalize',
    'parallel',
    'serial',
]

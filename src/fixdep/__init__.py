"""Narrow kbuild dependency files so config edits rebuild only affected objects."""

from .config import CliOverrides, FixdepConfig, load_effective_config
from .depfile import DepfileReadError, read_depfile
from .emitter import EmitterState, EmitterStateError, FragmentEmitter
from .errors import FixdepError
from .filters import ExclusionRules
from .pipeline import DepfileFixer, FixdepStats, fix_depfile
from .seen import SeenSet, fnv1a_32
from .symbols import iter_config_symbols, referenced_config_symbols
from .tokenizer import Token, iter_prerequisites, split_prerequisites

__version__ = "0.1.0"

__all__ = [
    "CliOverrides",
    "DepfileFixer",
    "DepfileReadError",
    "EmitterState",
    "EmitterStateError",
    "ExclusionRules",
    "FixdepConfig",
    "FixdepError",
    "FixdepStats",
    "FragmentEmitter",
    "SeenSet",
    "Token",
    "fix_depfile",
    "fnv1a_32",
    "iter_config_symbols",
    "iter_prerequisites",
    "load_effective_config",
    "read_depfile",
    "referenced_config_symbols",
    "split_prerequisites",
]

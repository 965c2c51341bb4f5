# immutableui/__init__.py

"""
immutableui - reconcile immutable UI descriptions onto live widget objects.

Descriptions are cheap immutable values. Building a new description for every
UI state and applying it incrementally against the previous one updates the
live widgets with the minimal set of writes.
"""
import logging

# --- Core model ---
from .attributes import AttributeBag
from .element import ApplyChain, ElementDescription
from .equality import StructuralElement, description_hash, descriptions_equal
from .errors import ImmutableUIError, MissingMember, TypeMismatch, UnsupportedCreate

# --- Reconciliation ---
from .lists import reconcile_list
from .members import MemberBinding, MemberKind, children, nested, scalar
from .reconciler import MemberApply, apply_member

# --- Bindings and hosting ---
from .binding import Bindings, MemberAccessor, TypeBinding, pipe
from .config import Config, configure_logging, get_config
from .host import Program, ViewHost

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AttributeBag", "ApplyChain", "ElementDescription", "StructuralElement",
    "description_hash", "descriptions_equal",
    "ImmutableUIError", "MissingMember", "TypeMismatch", "UnsupportedCreate",
    "reconcile_list", "MemberBinding", "MemberKind", "children", "nested", "scalar",
    "MemberApply", "apply_member",
    "Bindings", "MemberAccessor", "TypeBinding", "pipe",
    "Config", "configure_logging", "get_config",
    "Program", "ViewHost",
]

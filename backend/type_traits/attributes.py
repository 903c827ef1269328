"""
Attribute model — the closed vocabulary every trait computation runs on.

A TypeDescription is one type classification tag plus a fixed record of
boolean flags. Compound attributes ("has any user-provided constructor", etc.)
are plain functions over the record and are never stored.

Reference: https://en.cppreference.com/w/cpp/language/type

Abbreviations:
  nsdm   — non-static data member
  constr — constructor
  mf     — member function
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Mapping


class TypeClass(Enum):
    # fundamental types
    VOID            = "Void"
    NULLPTR_T       = "NullPointerType"   # std::nullptr_t
    ARITHMETIC      = "Arithmetic"        # float, double, bool, ints, char … NOT pointers
    # compound types
    REFERENCE       = "Reference"         # lvalue / rvalue refs to objects or functions
    POINTER         = "Pointer"           # pointer-to-object, pointer-to-member
    ARRAY           = "Array"             # int[5] etc. NOT std::array
    FUNCTION        = "Function"          # int() const& etc. NOT std::function or lambdas
    ENUMERATION     = "Enumeration"
    CLASS           = "Class"             # class / union / struct


_FUNDAMENTAL = frozenset({TypeClass.VOID, TypeClass.NULLPTR_T, TypeClass.ARITHMETIC})
_NON_OBJECT  = frozenset({TypeClass.FUNCTION, TypeClass.REFERENCE, TypeClass.VOID})
_SCALAR      = frozenset({
    TypeClass.ARITHMETIC, TypeClass.POINTER, TypeClass.ENUMERATION, TypeClass.NULLPTR_T,
})


def is_fundamental(t: TypeClass) -> bool:
    return t in _FUNDAMENTAL


def is_compound(t: TypeClass) -> bool:
    return not is_fundamental(t)


def is_object(t: TypeClass) -> bool:
    return t not in _NON_OBJECT


def is_scalar(t: TypeClass) -> bool:
    return t in _SCALAR


class UnknownAttribute(ValueError):
    """A flag name outside the closed attribute vocabulary."""

    def __init__(self, name: str):
        super().__init__(f"unknown attribute '{name}'")
        self.name = name


# ── The attribute record ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class TypeDescription:
    type_class: TypeClass = TypeClass.CLASS

    # constructors: "user provided" excludes explicitly defaulted or deleted,
    # "inherited" means `using Base::Base;`, "explicit" includes = default/delete
    has_user_provided_default_constr: bool = False
    has_inherited_default_constr: bool = False
    has_explicit_default_constr: bool = False
    has_user_provided_copy_constr: bool = False
    has_inherited_copy_constr: bool = False
    has_explicit_copy_constr: bool = False
    has_user_provided_move_constr: bool = False
    has_inherited_move_constr: bool = False
    has_explicit_move_constr: bool = False
    has_deleted_constr: bool = False

    # inheritance
    has_public_base_class: bool = False
    has_private_base_class: bool = False
    has_protected_base_class: bool = False
    has_virtual_base_class: bool = False

    # data members
    has_private_nsdm: bool = False
    has_protected_nsdm: bool = False
    has_nsdm_with_initializer: bool = False
    has_non_trivial_nsdm: bool = False
    has_initializer_needy_nsdm: bool = False  # `const int` or `int&` without an initializer

    # methods
    has_virtual_mf: bool = False  # defines or inherits a virtual member

    @classmethod
    def from_flags(
        cls,
        type_class: TypeClass = TypeClass.CLASS,
        flags: Mapping[str, bool] | None = None,
    ) -> "TypeDescription":
        """
        Build a description from a sparse name → bool mapping.

        Omitted flags are false. Raises UnknownAttribute for any name that is
        not part of the vocabulary.
        """
        flags = flags or {}
        for name in flags:
            if name not in ATTRIBUTE_NAMES:
                raise UnknownAttribute(name)
        return cls(type_class=type_class, **{k: bool(v) for k, v in flags.items()})

    def flags(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}

    def with_flags(self, **changes: bool) -> "TypeDescription":
        for name in changes:
            if name not in ATTRIBUTE_NAMES:
                raise UnknownAttribute(name)
        return replace(self, **changes)


ATTRIBUTE_NAMES: tuple[str, ...] = tuple(
    f.name for f in fields(TypeDescription) if f.name != "type_class"
)

ATTRIBUTE_GROUPS: dict[str, tuple[str, ...]] = {
    "construction": ATTRIBUTE_NAMES[0:10],
    "inheritance":  ATTRIBUTE_NAMES[10:14],
    "data_members": ATTRIBUTE_NAMES[14:19],
    "methods":      ATTRIBUTE_NAMES[19:20],
}

# Fixed emission order for base classes, paired with their C++ keyword.
BASE_CLASS_FLAGS: tuple[tuple[str, str], ...] = (
    ("has_public_base_class",    "public"),
    ("has_private_base_class",   "private"),
    ("has_protected_base_class", "protected"),
    ("has_virtual_base_class",   "virtual"),
)


def default_description() -> TypeDescription:
    """The visualizer's starting point: a plain class with nothing set."""
    return TypeDescription(type_class=TypeClass.CLASS)


# ── Compound attributes ──────────────────────────────────────────────────────

def has_user_provided_constr(td: TypeDescription) -> bool:
    return (td.has_user_provided_default_constr
            or td.has_user_provided_copy_constr
            or td.has_user_provided_move_constr)


def has_inherited_constr(td: TypeDescription) -> bool:
    return (td.has_inherited_default_constr
            or td.has_inherited_copy_constr
            or td.has_inherited_move_constr)


def has_explicit_constr(td: TypeDescription) -> bool:
    return (td.has_explicit_default_constr
            or td.has_explicit_copy_constr
            or td.has_explicit_move_constr)


def count_base_classes(td: TypeDescription) -> int:
    return sum(1 for name, _ in BASE_CLASS_FLAGS if getattr(td, name))

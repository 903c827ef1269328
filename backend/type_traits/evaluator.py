"""
Trait predicates — pure functions only.

Each predicate maps a TypeDescription to a verdict. is_aggregate additionally
records every fail criterion it checked, so a caller can explain a false
verdict rule by rule. None of these functions raise: a contradictory
description (e.g. an Array with constructor flags set) is simply evaluated.

Known simplifications, not modeled and treated as always satisfied:
  - default constructibility of bases and members, destructor accessibility
  - triviality of base classes (there is no base-class graph, only flags)
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields

from type_traits.attributes import (
    TypeClass,
    TypeDescription,
    has_explicit_constr,
    has_inherited_constr,
    has_user_provided_constr,
    is_object,
)


# ── Aggregate ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AggregateReasons:
    """The six fail criteria for a class type to be an aggregate."""
    has_private_or_protected_nsdm: bool
    has_user_provided_constr: bool
    has_inherited_constr: bool
    has_explicit_constr: bool
    has_virtual_private_or_protected_base: bool
    has_virtual_mf: bool

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)

    def failing(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def any(self) -> bool:
        return bool(self.failing())


REASON_DESCRIPTIONS: dict[str, str] = {
    "has_private_or_protected_nsdm":
        "Aggregates may not have private or protected non-static data members.",
    "has_user_provided_constr":
        "Aggregates may not have user-provided constructors "
        "(explicitly defaulted or deleted constructors are allowed).",
    "has_inherited_constr":
        "Aggregates may not inherit constructors (using Base::Base;).",
    "has_explicit_constr":
        "Aggregates may not have explicit constructors.",
    "has_virtual_private_or_protected_base":
        "Aggregates may not have virtual, private, or protected base classes.",
    "has_virtual_mf":
        "Aggregates may not have virtual member functions.",
}


@dataclass(frozen=True)
class AggregateResult:
    is_true: bool
    reasons: AggregateReasons | None = None


def aggregate_reasons(td: TypeDescription) -> AggregateReasons:
    # every criterion is recorded, even once one has already failed
    return AggregateReasons(
        has_private_or_protected_nsdm=td.has_private_nsdm or td.has_protected_nsdm,
        has_user_provided_constr=has_user_provided_constr(td),
        has_inherited_constr=has_inherited_constr(td),
        has_explicit_constr=has_explicit_constr(td),
        has_virtual_private_or_protected_base=(
            td.has_virtual_base_class
            or td.has_private_base_class
            or td.has_protected_base_class
        ),
        has_virtual_mf=td.has_virtual_mf,
    )


def is_aggregate(td: TypeDescription) -> AggregateResult:
    """
    https://en.cppreference.com/w/cpp/language/aggregate_initialization

    Arrays are always aggregates. Anything that is neither array nor class is
    not. Class types are aggregates iff none of the six reasons hold.
    """
    if td.type_class is TypeClass.ARRAY:
        return AggregateResult(is_true=True)
    if td.type_class is not TypeClass.CLASS:
        return AggregateResult(is_true=False)

    reasons = aggregate_reasons(td)
    return AggregateResult(is_true=not reasons.any(), reasons=reasons)


# ── Default construction ─────────────────────────────────────────────────────

_ALWAYS_DEFAULT_CONSTRUCTIBLE = frozenset({
    TypeClass.NULLPTR_T,
    TypeClass.ARITHMETIC,
    TypeClass.POINTER,
    TypeClass.ARRAY,
    TypeClass.ENUMERATION,
})


def is_default_constructible(td: TypeDescription) -> bool:
    """https://en.cppreference.com/w/cpp/types/is_default_constructible"""
    if not is_object(td.type_class):
        return False
    if td.type_class in _ALWAYS_DEFAULT_CONSTRUCTIBLE:
        return True

    # class types: no reference/const member lacking an initializer and no
    # explicitly deleted constructor
    return not td.has_initializer_needy_nsdm and not td.has_deleted_constr


def is_trivially_default_constructible(td: TypeDescription) -> bool:
    """https://en.cppreference.com/w/cpp/language/default_constructor"""
    return (is_default_constructible(td)
            and not td.has_user_provided_default_constr   # implicit or defaulted is fine
            and not td.has_virtual_mf
            and not td.has_virtual_base_class
            and not td.has_nsdm_with_initializer
            and not td.has_non_trivial_nsdm)


# ── Combined report ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TraitReport:
    is_aggregate: bool
    aggregate_reasons: AggregateReasons | None
    is_default_constructible: bool
    is_trivially_default_constructible: bool

    def to_dict(self) -> dict:
        reasons = self.aggregate_reasons
        return {
            "is_aggregate":                       self.is_aggregate,
            "aggregate_reasons":                  reasons.as_dict() if reasons else None,
            "failing_reasons":                    reasons.failing() if reasons else [],
            "is_default_constructible":           self.is_default_constructible,
            "is_trivially_default_constructible": self.is_trivially_default_constructible,
        }


def evaluate(td: TypeDescription) -> TraitReport:
    agg = is_aggregate(td)
    return TraitReport(
        is_aggregate=agg.is_true,
        aggregate_reasons=agg.reasons,
        is_default_constructible=is_default_constructible(td),
        is_trivially_default_constructible=is_trivially_default_constructible(td),
    )

"""
C++ snippet synthesis — pure functions only.

Turns a TypeDescription into the smallest struct declaration that shows the
selected attributes. Each fragment builder fills one placeholder of a fixed
template; placeholders with nothing to say render as nothing.

Two combinations cannot be written down and are reported instead of rendered:
  - more than one default-constructor style   → AmbiguousConstructorStyle
  - an inherited constructor with no base     → DanglingInheritedConstructor
"""
from __future__ import annotations

from dataclasses import dataclass

from type_traits.attributes import BASE_CLASS_FLAGS, TypeDescription

INDENT = "    "

TEMPLATE = """struct T |INHER|
{
|DEFAULT_CONSTR|
|VIRTUAL_MF|
|NSDM|
};"""


# ── Errors ───────────────────────────────────────────────────────────────────

class ConstructionError(ValueError):
    """The description cannot be rendered as consistent source text."""
    kind = "construction_error"


class AmbiguousConstructorStyle(ConstructionError):
    kind = "ambiguous_constructor_style"

    def __init__(self, styles: list[str]):
        super().__init__("multiple default-constructor styles specified: " + ", ".join(styles))
        self.styles = styles


class DanglingInheritedConstructor(ConstructionError):
    kind = "dangling_inherited_constructor"

    def __init__(self):
        super().__init__("inherited constructor specified with no base class")


# ── Fragments ────────────────────────────────────────────────────────────────

def inheritance_fragment(td: TypeDescription) -> tuple[str, int]:
    """
    Returns (fragment, base_count), e.g. (": public Base1, virtual Base2", 2).

    Bases are numbered in emission order, not by which flag produced them.
    """
    parts = []
    for flag, keyword in BASE_CLASS_FLAGS:
        if getattr(td, flag):
            parts.append(f"{keyword} Base{len(parts) + 1}")
    if not parts:
        return "", 0
    return ": " + ", ".join(parts), len(parts)


def _default_constr_styles(td: TypeDescription) -> list[tuple[str, str]]:
    styles = []
    if td.has_user_provided_default_constr:
        styles.append(("user_provided", "T() {}"))
    if td.has_inherited_default_constr:
        styles.append(("inherited", "using Base1::Base1;"))
    if td.has_explicit_default_constr:
        styles.append(("explicit", "explicit T() = default;"))
    return styles


def validate_construction(td: TypeDescription, base_count: int) -> ConstructionError | None:
    """Return the first cross-field inconsistency, or None if renderable."""
    styles = _default_constr_styles(td)
    if len(styles) > 1:
        return AmbiguousConstructorStyle([name for name, _ in styles])
    if td.has_inherited_default_constr and base_count == 0:
        return DanglingInheritedConstructor()
    return None


def default_constr_fragment(td: TypeDescription, base_count: int) -> str:
    error = validate_construction(td, base_count)
    if error is not None:
        raise error
    styles = _default_constr_styles(td)
    return INDENT + styles[0][1] if styles else ""


def virtual_mf_fragment(td: TypeDescription) -> str:
    return INDENT + "virtual f();" if td.has_virtual_mf else ""


def nsdm_fragment(td: TypeDescription) -> str:
    lines = []
    if td.has_nsdm_with_initializer:
        lines.append(INDENT + "int i = 0;")
    if td.has_initializer_needy_nsdm:
        # deliberately left without an initializer
        lines.append(INDENT + "int& r;")
    return "\n".join(lines)


# ── Assembly ─────────────────────────────────────────────────────────────────

def render_type(td: TypeDescription) -> str:
    """
    Render the struct declaration for *td*.

    Raises AmbiguousConstructorStyle or DanglingInheritedConstructor when the
    flags describe something that cannot be written as one declaration.
    """
    inher, base_count = inheritance_fragment(td)
    replacements = {
        "|INHER|":          inher,
        "|DEFAULT_CONSTR|": default_constr_fragment(td, base_count),
        "|VIRTUAL_MF|":     virtual_mf_fragment(td),
        "|NSDM|":           nsdm_fragment(td),
    }

    result = TEMPLATE
    for token, replacement in replacements.items():
        result = result.replace(token, replacement)

    # the template itself has no blank lines; any left over are empty placeholders
    return "\n".join(line.rstrip() for line in result.splitlines() if line.strip())


@dataclass(frozen=True)
class RenderResult:
    """Exactly one of text / error is set."""
    text: str | None = None
    error: ConstructionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def try_render(td: TypeDescription) -> RenderResult:
    try:
        return RenderResult(text=render_type(td))
    except ConstructionError as e:
        return RenderResult(error=e)

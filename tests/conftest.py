"""
Shared fixtures and helpers for the type-traits test suite.

The core (backend/type_traits) is pure, so most tests need nothing but
TypeDescription values. HTTP tests build a fresh app per test through
create_app(); no running server required.
"""
import sys
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from type_traits.attributes import ATTRIBUTE_NAMES, TypeClass, TypeDescription  # noqa: E402


def make(type_class: TypeClass = TypeClass.CLASS, **flags: bool) -> TypeDescription:
    """Shorthand: make(has_virtual_mf=True) → Class with one flag set."""
    return TypeDescription.from_flags(type_class, flags)


def all_flags_set(type_class: TypeClass) -> TypeDescription:
    return TypeDescription.from_flags(type_class, {name: True for name in ATTRIBUTE_NAMES})


@pytest.fixture
def client(tmp_path):
    from fastapi.testclient import TestClient

    from config import Settings
    from main import create_app

    settings = Settings(site_dir=tmp_path / "no-site", allow_origin=["http://localhost:8080"])
    with TestClient(create_app(settings)) as c:
        yield c

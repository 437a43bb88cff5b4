"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from casbin.model import Model

from policystore.storage.adapter import SQLiteAdapter


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


RBAC_MODEL = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "policy.db"


@pytest.fixture
def adapter(db_path: Path) -> Generator[SQLiteAdapter, None, None]:
    with SQLiteAdapter(db_path) as a:
        yield a


@pytest.fixture
def model_conf(tmp_path: Path) -> Path:
    """RBAC model definition written to disk for casbin.Enforcer."""
    path = tmp_path / "rbac_model.conf"
    path.write_text(RBAC_MODEL, encoding="utf-8")
    return path


@pytest.fixture
def new_model() -> Callable[[], Model]:
    """Factory for empty RBAC models."""

    def _make() -> Model:
        model = Model()
        model.load_model_from_text(RBAC_MODEL)
        return model

    return _make


@pytest.fixture
def sample_model(new_model: Callable[[], Model]) -> Model:
    """Model with two permission rules and one role assignment."""
    model = new_model()
    model.add_policy("p", "p", ["alice", "data1", "read"])
    model.add_policy("p", "p", ["bob", "data2", "write"])
    model.add_policy("g", "g", ["alice", "admin"])
    return model

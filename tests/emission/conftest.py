"""Shared fixtures for emission tests."""

from __future__ import annotations

from pathlib import Path

import pytest

USER_GO = """\
package models

type User struct {
    ID    uint   `gorm:"primaryKey" json:"id"`
    Name  string `gorm:"column:user_name" json:"name"`
    Email string `json:"email,omitempty"`
}
"""


@pytest.fixture
def user_source(tmp_path: Path) -> Path:
    source = tmp_path / "models" / "user.go"
    source.parent.mkdir(parents=True)
    source.write_text(USER_GO)
    return source


@pytest.fixture
def no_gofmt(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide gofmt so rendered text is written verbatim."""
    monkeypatch.setattr("metamodel.emission.render.shutil.which", lambda _name: None)

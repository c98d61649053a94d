"""Shared fixtures for extraction tests: small Go projects on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from metamodel.extraction._internal.parsing import GoSourceParser

GO_MOD = "module example.com/app\n\ngo 1.21\n"

ENTITY_GO = """\
package entity

import "time"

type Entity struct {
    ID        uint      `gorm:"primaryKey" json:"id"`
    CreatedAt time.Time `gorm:"column:created_at" json:"created_at"`
    Version   int       `gorm:"->" json:"version"`
}
"""

USER_GO = """\
package models

import (
    "example.com/app/internal/entity"
    "github.com/gofrs/uuid"
)

type User struct {
    entity.Entity `gorm:"embedded"`
    Name  string    `gorm:"column:user_name" json:"name"`
    Email string    `json:"email"`
    Roles []Role    `gorm:"many2many:user_roles"`
    Token uuid.UUID `gorm:"not null"`
}

type Role struct {
    Name string `gorm:"column:name"`
}
"""


def write_go(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def parser() -> GoSourceParser:
    return GoSourceParser()


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """Module example.com/app with an entity package and a models package."""
    root = tmp_path / "app"
    write_go(root / "go.mod", GO_MOD)
    write_go(root / "internal" / "entity" / "entity.go", ENTITY_GO)
    write_go(root / "models" / "user.go", USER_GO)
    return root


@pytest.fixture
def go_file():
    """Factory writing a Go source (or go.mod) file, creating parents."""
    return write_go

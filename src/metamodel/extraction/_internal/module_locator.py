"""go.mod discovery and import path -> directory mapping.

``find_module_info`` walks up from a source file to the nearest ``go.mod``
and reads its ``module`` directive. ``GoModuleLayout`` maps import paths of
the project's own packages to directories under the module root; anything
outside the project module is reported as not found.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

from metamodel.config.constants import MANIFEST_FILENAME
from metamodel.extraction.models import ModuleInfo

logger = logging.getLogger(__name__)

_GO_MOD_MODULE_RE = re.compile(r"^\s*module\s+(\S+)", re.MULTILINE)


def parse_go_mod(go_mod_text: str) -> str | None:
    """Extract the module path from a go.mod file.

    >>> parse_go_mod('module github.com/user/repo\\n\\ngo 1.21\\n')
    'github.com/user/repo'
    """
    m = _GO_MOD_MODULE_RE.search(go_mod_text)
    if m is None:
        return None
    return m.group(1).strip('"`')


def find_module_info(source_file: Path) -> ModuleInfo | None:
    """Locate the module owning ``source_file``.

    Returns None when no ancestor directory holds a readable go.mod with a
    module directive; cross-package resolution is then unavailable.
    """
    directory = source_file.resolve().parent
    for candidate in (directory, *directory.parents):
        manifest = candidate / MANIFEST_FILENAME
        if not manifest.is_file():
            continue
        try:
            text = manifest.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("%s: unreadable (%s)", manifest, e)
            return None
        module_path = parse_go_mod(text)
        if module_path is None:
            logger.debug("%s: no module directive", manifest)
            return None
        logger.debug("go.mod: %s -> %s", manifest, module_path)
        return ModuleInfo(module_path=module_path, root_dir=candidate)
    return None


class ModuleDirectoryResolver(Protocol):
    """Maps a Go import path to the directory holding its sources."""

    def directory_for(self, import_path: str) -> Path | None: ...


class GoModuleLayout:
    """Resolves import paths of the project's own packages under its module root.

    >>> layout = GoModuleLayout(ModuleInfo("example.com/app", Path("/src/app")))
    >>> layout.directory_for("example.com/app/internal/entity")
    PosixPath('/src/app/internal/entity')
    >>> layout.directory_for("github.com/gofrs/uuid") is None
    True
    """

    def __init__(self, module_info: ModuleInfo | None) -> None:
        self._module_info = module_info

    def directory_for(self, import_path: str) -> Path | None:
        info = self._module_info
        if info is None or not info.contains(import_path):
            return None
        rel = import_path[len(info.module_path) :].lstrip("/")
        return info.root_dir / rel if rel else info.root_dir

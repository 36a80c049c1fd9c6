import os
from pathlib import Path
from typing import Dict, Optional

import pytest

from recentfiles.config import loader


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory, monkeypatch):
    """Keeps a developer's ~/.config/recentfiles/config.toml out of the tests."""
    missing = tmp_path_factory.mktemp("user_config") / "config.toml"
    monkeypatch.setattr(loader, "USER_CONFIG_FILE", missing)
    return missing


def create_project_structure(base_dir: Path, structure: Dict[str, Optional[str]]) -> None:
    """
    Creates files and directories under base_dir.

    Keys ending in "/" are directories; other keys are files whose value is
    their text content.
    """
    for rel_path, content in structure.items():
        target = base_dir / rel_path
        if rel_path.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content or "")


def set_mtime(path: Path, timestamp: float) -> None:
    os.utime(path, (timestamp, timestamp))


@pytest.fixture
def recency_project(tmp_path: Path) -> Path:
    """a.txt older than b.txt, plus a .txt file inside .git that must never show up."""
    proj_dir = tmp_path / "recency_proj"
    proj_dir.mkdir()
    create_project_structure(proj_dir, {
        "a.txt": "older",
        "b.txt": "newer",
        ".git/c.txt": "vcs internals",
    })
    set_mtime(proj_dir / "a.txt", 1_700_000_000)
    set_mtime(proj_dir / "b.txt", 1_700_000_010)
    set_mtime(proj_dir / ".git" / "c.txt", 1_700_000_020)
    return proj_dir


@pytest.fixture
def gitignore_project(tmp_path: Path) -> Path:
    proj_dir = tmp_path / "gitignore_proj"
    proj_dir.mkdir()
    create_project_structure(proj_dir, {
        ".gitignore": "secret.txt\n",
        "secret.txt": "do not list me",
        "public.txt": "list me",
    })
    return proj_dir

"""
calaxis.engines.resources

Locating and reading calendar resource data.

Search order for a resource ``<path>`` of a calendar family:
  1) directories listed in CALAXIS_DATA_PATH (os.pathsep separated)
  2) user cache ($XDG_CACHE_HOME/calaxis/<path> or ~/.cache/calaxis/<path>)
  3) packaged data (calaxis.engines.data/<path>)

The first hit wins. A resource that cannot be found anywhere yields None;
errors while reading an existing resource propagate.
"""

from __future__ import annotations

import importlib.resources
import io
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, TextIO

logger = logging.getLogger(__name__)

DATA_PATH_ENV = "CALAXIS_DATA_PATH"
PACKAGE = "calaxis.engines.data"


class ResourceLoader(Protocol):
    def open_text(self, family: str, path: str) -> Optional[TextIO]:
        """Open the resource as text, or return None if it does not exist."""
        ...


def _search_dirs() -> List[Path]:
    dirs: List[Path] = []

    # 1) explicit override
    p = os.environ.get(DATA_PATH_ENV, "").strip()
    if p:
        dirs.extend(Path(x).expanduser() for x in p.split(os.pathsep) if x.strip())

    # 2) user cache (works for non-editable installs)
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    dirs.append((Path(xdg).expanduser() / "calaxis") if xdg else (Path.home() / ".cache" / "calaxis"))
    return dirs


class DataPathResourceLoader:
    """Filesystem directories first, packaged data last."""

    def __init__(self, extra_dirs: Iterable[Path] = ()):
        self.extra_dirs = tuple(Path(d) for d in extra_dirs)

    def locate(self, family: str, path: str):
        for base in self.extra_dirs + tuple(_search_dirs()):
            candidate = base / path
            if candidate.is_file():
                logger.debug("Resource %s/%s found at %s", family, path, candidate)
                return candidate

        # 3) packaged data
        packaged = importlib.resources.files(PACKAGE).joinpath(path)
        if packaged.is_file():
            logger.debug("Resource %s/%s found in package data", family, path)
            return packaged

        logger.debug("Resource %s/%s not found", family, path)
        return None

    def open_text(self, family: str, path: str) -> Optional[TextIO]:
        found = self.locate(family, path)
        if found is None:
            return None
        return found.open("r", encoding="utf-8")


class MappingResourceLoader:
    """In-memory resources keyed by path, e.g. for tests or embedded tables."""

    def __init__(self, resources: Dict[str, str]):
        self.resources = dict(resources)

    def open_text(self, family: str, path: str) -> Optional[TextIO]:
        text = self.resources.get(path)
        return None if text is None else io.StringIO(text)


def parse_properties(lines: Iterable[str]) -> Dict[str, str]:
    """
    Minimal reader for property files: ``key=value`` or ``key: value`` per
    line, '#' and '!' start comments, blank lines are skipped. Later keys
    override earlier ones.
    """
    out: Dict[str, str] = {}
    for raw in lines:
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        cut = [i for i in (line.find("="), line.find(":")) if i >= 0]
        if not cut:
            out[line] = ""
            continue
        i = min(cut)
        out[line[:i].strip()] = line[i + 1:].strip()
    return out


DEFAULT_LOADER = DataPathResourceLoader()

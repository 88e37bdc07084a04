"""Turning base names and extensions into full domain names."""

from pathlib import Path
from typing import Iterable

DEFAULT_EXTENSIONS = [".com", ".io", ".app", ".org"]


def normalize_extensions(value: str | Iterable[str]) -> list[str]:
    """
    Normalize an extension list.

    Accepts "com, .io" or ["com", ".io"]. Each entry is trimmed and gets a
    leading dot if it has none. Blank entries are dropped.
    """
    if isinstance(value, str):
        value = value.split(",")

    extensions = []
    for ext in value:
        ext = ext.strip()
        if not ext:
            continue
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return extensions


def unique_names(names: Iterable[str]) -> list[str]:
    """Strip names, drop blanks, and remove duplicates keeping first occurrence."""
    return list(dict.fromkeys(n.strip() for n in names if n and n.strip()))


def expand_domains(names: Iterable[str], extensions: Iterable[str]) -> list[str]:
    """
    Combine base names with extensions.

    Order is name-major, extension-minor:
        expand_domains(["a", "b"], [".com", ".io"])
        -> ["a.com", "a.io", "b.com", "b.io"]
    """
    extensions = list(extensions)
    return [f"{name}{ext}" for name in unique_names(names) for ext in extensions]


def load_names_file(path: str | Path) -> list[str]:
    """
    Read base names from a text file, one per line.

    Blank lines and lines starting with '#' are skipped.
    Raises FileNotFoundError if the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    names = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            names.append(line)
    return names

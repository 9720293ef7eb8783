"""Reading and writing the JSON/YAML files used for configs and topic libraries."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, TextIO, Union

import yaml

PathLike = Union[str, Path]
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def is_yaml_path(path: PathLike) -> bool:
    return Path(path).suffix.lower() in YAML_SUFFIXES


def _write_atomic(path: Path, write: Callable[[TextIO], None]) -> None:
    # The temp file must share a filesystem with the target for os.replace.
    path.parent.mkdir(parents=True, exist_ok=True)
    handle, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(handle, "w", encoding="utf-8") as stream:
            write(stream)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


def save_json(path: PathLike, data: Any, *, indent: int = 2) -> None:
    """Write ``data`` to ``path`` as UTF-8 JSON, replacing any existing file atomically."""

    def _dump(stream: TextIO) -> None:
        json.dump(data, stream, indent=indent, ensure_ascii=False)
        stream.write("\n")

    _write_atomic(Path(path), _dump)


def save_yaml(path: PathLike, data: Any) -> None:
    _write_atomic(Path(path), lambda stream: yaml.safe_dump(data, stream, sort_keys=False))


def load_yaml_or_json(path: PathLike) -> Dict[str, Any]:
    """Load a mapping from YAML or JSON depending on the file suffix.

    An empty file loads as ``{}``; any other non-mapping root is a ``TypeError``.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as stream:
        loaded = yaml.safe_load(stream) if is_yaml_path(path) else json.load(stream)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise TypeError(f"Expected mapping at root of {path.name}")
    return loaded

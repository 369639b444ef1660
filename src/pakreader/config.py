"""Index build options and archive key files (JSON/YAML)."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError, E_CONFIG

__all__ = ["IndexOptions", "KeyRing", "load_keys"]

DEFAULT_KEY = "*"


@dataclass(slots=True)
class IndexOptions:
    archives: List[Path] = field(default_factory=list)
    key_file: Path | None = None
    # Worker threads used to add archives; 1 adds them sequentially.
    jobs: int = 1
    # Report and skip archives that fail to index instead of aborting.
    skip_errors: bool = False


@dataclass(slots=True)
class KeyRing:
    """Key material per archive file name, with an optional "*" default."""

    keys: Dict[str, bytes] = field(default_factory=dict)

    def key_for(self, archive: str | Path) -> Optional[bytes]:
        name = Path(archive).name
        if name in self.keys:
            return self.keys[name]
        return self.keys.get(DEFAULT_KEY)


def _config_error(message: str, path: Path) -> ConfigError:
    return ConfigError(code=E_CONFIG, message=message, context={"path": str(path)})


def _parse_key(value: Any, name: str, path: Path) -> bytes:
    if not isinstance(value, str):
        raise _config_error(f"Key for '{name}' must be a hex string", path)
    text = value.strip()
    if text.lower().startswith("0x"):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise _config_error(f"Invalid hex key for '{name}': {e}", path) from e


def load_keys(path: str | Path) -> KeyRing:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        data: Any = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if data is None:
        return KeyRing()
    if not isinstance(data, dict):
        raise _config_error("Root of key file must be a mapping", p)
    return KeyRing(
        {str(name): _parse_key(value, str(name), p) for name, value in data.items()}
    )

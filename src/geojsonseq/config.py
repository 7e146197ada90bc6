from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .geo import DEFAULT_PRECISION


@dataclass
class CodecConfig:
    # Round decoded coordinates to this many decimal places; None keeps them exact.
    precision: int | None = DEFAULT_PRECISION

    # Passed through to `json.dumps` when encoding.
    ensure_ascii: bool = False

    # Whether `iter_items` ends after reporting an I/O failure.
    stop_on_transport_error: bool = True

    def reader_kwargs(self) -> dict[str, Any]:
        return {"precision": self.precision}

    def writer_kwargs(self) -> dict[str, Any]:
        return {"ensure_ascii": self.ensure_ascii}


def _as_int(v: Any) -> int | None:
    return v if isinstance(v, int) and not isinstance(v, bool) and v >= 0 else None


def _as_bool(v: Any) -> bool | None:
    return v if isinstance(v, bool) else None


def load_codec_config(path: Path | None = None) -> CodecConfig:
    """Load a YAML codec config if present; otherwise return defaults."""

    data: dict[str, Any] = {}
    if path is not None and path.exists():
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if isinstance(loaded, dict):
            data = loaded

    cfg = CodecConfig()

    precision = _as_int(data.get("precision"))
    cfg.precision = precision if precision is not None else cfg.precision

    ensure_ascii = _as_bool(data.get("ensure_ascii"))
    cfg.ensure_ascii = ensure_ascii if ensure_ascii is not None else cfg.ensure_ascii

    stop = _as_bool(data.get("stop_on_transport_error"))
    cfg.stop_on_transport_error = stop if stop is not None else cfg.stop_on_transport_error

    return cfg

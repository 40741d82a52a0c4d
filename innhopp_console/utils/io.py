"""File IO utilities."""

from __future__ import annotations

import os
import unicodedata
from pathlib import Path

import chardet

DETECTION_SAMPLE_BYTES = 64 * 1024


def detect_encoding(path: os.PathLike[str] | str, *, sample_size: int = DETECTION_SAMPLE_BYTES) -> str:
    """Guess the encoding of an uploaded dump from its first bytes."""

    with open(path, "rb") as handle:
        raw = handle.read(sample_size)
    if not raw:
        return "utf-8"
    detection = chardet.detect(raw)
    encoding = detection.get("encoding") or "utf-8"
    # ASCII detections are widened so later non-ASCII bytes still decode.
    return "utf-8" if encoding.lower() == "ascii" else encoding


def read_text(path: os.PathLike[str] | str, encoding: str = "utf-8-sig") -> str:
    """Read ``path`` as text; ``encoding="auto"`` runs :func:`detect_encoding` first."""

    if encoding == "auto":
        encoding = detect_encoding(path)
    return Path(path).read_text(encoding=encoding, errors="replace")


def safe_filename(filename: str) -> str:
    """Return a filesystem safe filename."""

    normalized = unicodedata.normalize("NFKD", filename)
    sanitized = [c for c in normalized if c.isalnum() or c in {"-", "_", "."}]
    return "".join(sanitized) or "upload"


def ensure_directory(path: os.PathLike[str] | str) -> Path:
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory

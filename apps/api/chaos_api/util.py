from __future__ import annotations

import os
import re
from pathlib import Path


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp.{os.getpid()}")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)


_SAFE_STEM_RE = re.compile(r"[^a-zA-Z0-9]+")


def safe_filename_stem(title: str) -> str:
    cleaned = _SAFE_STEM_RE.sub("-", title.strip()).strip("-").lower()
    return cleaned or "untitled"

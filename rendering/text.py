"""Plain-text helpers over inline runs and doc content"""

import re
from typing import Iterable

from core.models import ImageRun, LinkRun, TextRun
from config import settings


def extract_text(run) -> str:
    """Visible text of one inline run"""
    if isinstance(run, TextRun):
        return run.text
    if isinstance(run, LinkRun):
        return run.text
    if isinstance(run, ImageRun):
        return run.alt or ""
    raise TypeError(f"Unsupported inline run: {type(run).__name__}")


def join_runs(runs: Iterable) -> str:
    return "".join(extract_text(run) for run in runs)


def content_preview(content: str, limit: int = None) -> str:
    """One-line preview with markdown markers removed"""
    limit = limit or settings.MAX_PREVIEW_CHARS
    preview = re.sub(r"[#*`]", "", content or "")
    preview = re.sub(r"\n+", " ", preview).strip()
    if len(preview) > limit:
        return preview[:limit - 3] + "..."
    return preview


def display_value(value) -> str:
    """Cell value as table text; booleans print lowercase"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

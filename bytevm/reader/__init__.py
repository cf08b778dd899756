from __future__ import annotations

from .scanner import Token, scan, scan_all, KEYWORDS

__all__ = ["Token", "scan", "scan_all", "KEYWORDS"]

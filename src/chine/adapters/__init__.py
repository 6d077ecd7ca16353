"""
Adapters: concrete implementations of domain ports.

Adapters may import `chine.domain` but never `chine.application` or `chine.api`.
"""

from __future__ import annotations

from chine.adapters.logger import JsonlLogger

__all__ = ["JsonlLogger"]

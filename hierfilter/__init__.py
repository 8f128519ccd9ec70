"""Public package surface for hierfilter.

Exports ``main`` for programmatic CLI invocation.
The engine lives in ``hierfilter.controller`` and ``hierfilter.tree_model``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]

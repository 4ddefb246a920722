"""page-mirror core library.

This package saves a single web page for offline use: the page itself plus
every script, stylesheet, image and other resource it references, with the
references rewritten to point at the local copies.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"

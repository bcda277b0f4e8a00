"""Digital Chief of Staff.

An assistant that helps executives manage communications, delegate routine
inquiries, and maintain institutional knowledge. Only the process bootstrap
lives here for now.
"""

from __future__ import annotations

__all__ = [
    "APP_NAME",
    "__version__",
]

APP_NAME = "Digital Chief of Staff"

__version__ = "0.1.0"

"""javascript-check-dependencies core package.

Detects known-compromised npm package versions referenced by package-lock.json
files, using a feed of banned version ranges. The scanning logic is callable
from both the GitHub Action wrapper and the standalone CLI.
"""

__all__ = [
    "core",
]

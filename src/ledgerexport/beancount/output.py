#!/usr/bin/env python3
"""
Output Accumulator

Append-only sequence of text fragments. The final artifact is the fragments
joined in the order they were appended.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class OutputAccumulator:
    """Collects rendered fragments in emission order."""

    def __init__(self) -> None:
        self._fragments: list[str] = []

    def append(self, fragment: str) -> None:
        self._fragments.append(fragment)

    def render(self) -> str:
        """Concatenate all fragments in accumulation order."""
        return "".join(self._fragments)

    def write(self, path: str | Path) -> Path:
        """
        Write the artifact in a single write.

        Returns:
            The path written to
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        logger.info(f"Generated transactions saved to {path}")
        return path

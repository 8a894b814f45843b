"""Finding model."""

from __future__ import annotations

from dataclasses import dataclass

ROOT_LOCATION = "<root>"


@dataclass(frozen=True)
class Finding:
    """One occurrence of a package version matching a bad dependency rule."""

    file: str
    location: str
    name: str
    version: str
    matched_ranges: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.location:
            raise ValueError("Finding location must be non-empty")
        if not self.matched_ranges:
            raise ValueError("Finding must carry at least one matched range")

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "location": self.location,
            "name": self.name,
            "version": self.version,
            "matchedRanges": list(self.matched_ranges),
        }

    def describe(self) -> str:
        """Render the multi-line block used in CI logs."""
        return (
            f"File: {self.file}\n"
            f"Location: {self.location}\n"
            f"Package: {self.name}\n"
            f"Version: {self.version}\n"
            f"Matched ranges: {', '.join(self.matched_ranges)}\n"
        )

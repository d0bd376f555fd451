"""Command request data types for the client CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class GetNumberCommand:
    """Look up a number by name."""

    name: str
    command: Literal["get-number"] = "get-number"


@dataclass(frozen=True)
class GetStringCommand:
    """Look up a string by index."""

    index: int
    command: Literal["get-string"] = "get-string"


@dataclass(frozen=True)
class GetFileCommand:
    """Download a file by filename."""

    filename: str
    output_path: str | None = None
    command: Literal["get-file"] = "get-file"


CommandRequest = GetNumberCommand | GetStringCommand | GetFileCommand

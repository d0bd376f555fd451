"""Command parser for client CLI arguments."""

from pathlib import Path

from client.models import (
    CommandRequest,
    GetFileCommand,
    GetNumberCommand,
    GetStringCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(tokens: list[str]) -> CommandRequest:
    """Parse command tokens into a CommandRequest object.

    Args:
        tokens: Command name followed by its arguments

    Returns:
        CommandRequest object (one of GetNumber/GetString/GetFile)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "get-number":
        return _parse_get_number(tokens[1:])
    elif command_name == "get-string":
        return _parse_get_string(tokens[1:])
    elif command_name == "get-file":
        return _parse_get_file(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_get_number(args: list[str]) -> GetNumberCommand:
    """Parse 'get-number <name>' command."""
    if len(args) != 1:
        raise ParseError("get-number requires exactly 1 argument: <name>")

    return GetNumberCommand(name=args[0])


def _parse_get_string(args: list[str]) -> GetStringCommand:
    """Parse 'get-string <index>' command."""
    if len(args) != 1:
        raise ParseError("get-string requires exactly 1 argument: <index>")

    try:
        index = int(args[0])
    except ValueError:
        raise ParseError(f"Invalid index: {args[0]}")

    return GetStringCommand(index=index)


def _parse_get_file(args: list[str]) -> GetFileCommand:
    """Parse 'get-file <filename> [output_path]' command."""
    if not 1 <= len(args) <= 2:
        raise ParseError("get-file requires 1 or 2 arguments: <filename> [output_path]")

    filename = args[0]
    output_path = args[1] if len(args) > 1 else None

    destination = Path(output_path if output_path is not None else filename)
    if destination.name in ("", ".", ".."):
        raise ParseError(f"Cannot derive an output file name from '{destination}'; pass [output_path]")

    return GetFileCommand(filename=filename, output_path=output_path)

"""Client CLI entry point."""

import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional

from common.exceptions import DataServiceError
from common.logging_config import setup_logging
from client.data_client import DataServiceClient
from client.models import CommandRequest, GetFileCommand, GetNumberCommand, GetStringCommand
from client.parser import ParseError, parse_command

USAGE = """Usage: dataclient <hostname> <port> <command> [args]
COMMANDS
    get-number <name>
    get-string <index>
    get-file <filename> [output_path]"""


async def execute(client: DataServiceClient, command: CommandRequest) -> str:
    """
    Run a parsed command against the server.

    Returns:
        Text to print for the user
    """
    if isinstance(command, GetNumberCommand):
        return str(await client.get_number(command.name))
    if isinstance(command, GetStringCommand):
        return await client.get_string(command.index)
    if isinstance(command, GetFileCommand):
        output_path = command.output_path or Path(command.filename).name
        written = await client.download_file(command.filename, output_path)
        return f"Saved {command.filename} to {output_path} ({written} bytes)"
    raise ParseError(f"Unsupported command: {command}")


async def run(target: str, command: CommandRequest) -> str:
    async with DataServiceClient(target) as client:
        return await execute(client, command)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the client CLI."""
    if argv is None:
        argv = sys.argv[1:]

    logger = setup_logging('client', log_level=os.getenv('LOG_LEVEL', 'WARNING'))

    if len(argv) < 3:
        print(USAGE)
        return 1

    hostname, port = argv[0], argv[1]
    try:
        command = parse_command(argv[2:])
    except ParseError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1

    try:
        print(asyncio.run(run(f"{hostname}:{port}", command)))
    except DataServiceError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Client error: {e}", exc_info=True)
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())

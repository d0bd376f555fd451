"""Entry point for the data server.
Builds the DataService and serves it over gRPC until interrupted.
"""

import asyncio
import signal
import sys
from typing import List, Optional, Tuple

from common.logging_config import setup_logging
from dataserver import config
from dataserver.grpc_server import create_server
from dataserver.service import DataService

logger = setup_logging('dataserver')

USAGE = """Usage: dataserver <hostname> <port>
EXAMPLE
    dataserver localhost 50051"""


def resolve_address(argv: List[str]) -> Optional[Tuple[str, str]]:
    """
    Determine the listen address from command-line arguments.

    Falls back to DATA_SERVICE_HOST/DATA_SERVICE_PORT when no arguments are
    given and both are set.

    Args:
        argv: Arguments without the program name

    Returns:
        (hostname, port), or None if the address is incomplete
    """
    if len(argv) >= 2:
        return argv[0], argv[1]
    if not argv and config.DATA_SERVICE_HOST and config.DATA_SERVICE_PORT:
        return config.DATA_SERVICE_HOST, config.DATA_SERVICE_PORT
    return None


def describe_tables(data_service: DataService) -> str:
    """Summarize the lookup tables for the startup log."""
    numbers = ", ".join(f"{entry.name}={entry.value}" for entry in data_service.number_lookup.entries())
    strings = ", ".join(f"{entry.index}:{entry.value}" for entry in data_service.string_lookup.entries())
    return (
        f"{len(data_service.number_lookup)} numbers [{numbers}], "
        f"{len(data_service.string_lookup)} strings [{strings}]"
    )


async def serve(data_service: DataService, hostname: str, port: str) -> None:
    """
    Start and run gRPC server.

    Args:
        data_service: DataService to expose
        hostname: Interface to listen on
        port: Port to listen on
    """
    server = create_server(data_service)
    server_address = f'{hostname}:{port}'
    server.add_insecure_port(server_address)

    await server.start()
    logger.info(f"Server listening on {server_address}")

    async def shutdown(sig=None):
        if sig:
            logger.info(f"Received signal {sig}, shutting down...")
        else:
            logger.info("Shutting down...")
        await server.stop(config.GRACE_PERIOD_SECONDS)
        logger.info("Data server stopped")

    if sys.platform != 'win32':
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda s=sig: asyncio.create_task(shutdown(s)))

    await server.wait_for_termination()


def main(argv: Optional[List[str]] = None) -> int:
    """Bootstrap the data server."""
    if argv is None:
        argv = sys.argv[1:]

    address = resolve_address(argv)
    if address is None:
        print(USAGE)
        return 1

    hostname, port = address
    data_service = DataService()
    logger.info(f"Initialized data service: {describe_tables(data_service)}")

    try:
        asyncio.run(serve(data_service, hostname, port))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, data server shutdown complete")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())

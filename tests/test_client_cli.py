"""Unit tests for client command parsing and execution."""

import pytest

from client.main import execute, main
from client.models import GetFileCommand, GetNumberCommand, GetStringCommand
from client.parser import ParseError, parse_command
from common.exceptions import NotFoundError


class TestParser:
    """Test parse_command."""

    def test_get_number(self):
        assert parse_command(["get-number", "three"]) == GetNumberCommand(name="three")

    def test_get_string(self):
        assert parse_command(["get-string", "-1"]) == GetStringCommand(index=-1)

    def test_get_file_with_output(self):
        command = parse_command(["get-file", "/data/a.bin", "out.bin"])

        assert command == GetFileCommand(filename="/data/a.bin", output_path="out.bin")

    def test_get_file_default_output(self):
        assert parse_command(["get-file", "a.bin"]).output_path is None

    def test_get_file_output_with_trailing_slash(self):
        command = parse_command(["get-file", "a.bin", "downloads/"])

        assert command.output_path == "downloads/"

    @pytest.mark.parametrize("tokens", [
        [],
        ["unknown"],
        ["get-number"],
        ["get-number", "a", "b"],
        ["get-string", "one"],
        ["get-file"],
        ["get-file", "a", "b", "c"],
        ["get-file", "/"],
        ["get-file", "."],
        ["get-file", "/data/.."],
        ["get-file", "a.bin", "/"],
    ])
    def test_invalid_commands(self, tokens):
        with pytest.raises(ParseError):
            parse_command(tokens)


class TestExecute:
    """Test executing commands against a running server."""

    @pytest.mark.asyncio
    async def test_number_and_string(self, client):
        assert await execute(client, GetNumberCommand(name="four")) == "4"
        assert await execute(client, GetStringCommand(index=4)) == "eggs"

    @pytest.mark.asyncio
    async def test_get_file(self, client, make_file, tmp_path):
        path = make_file(4000)
        output = tmp_path / "copy.bin"

        result = await execute(client, GetFileCommand(filename=str(path), output_path=str(output)))

        assert "4000 bytes" in result
        assert output.read_bytes() == path.read_bytes()

    @pytest.mark.asyncio
    async def test_not_found_propagates(self, client):
        with pytest.raises(NotFoundError):
            await execute(client, GetNumberCommand(name="five"))


class TestMain:
    """Test argument handling of the CLI entry point."""

    def test_missing_arguments_prints_usage(self, capsys):
        assert main(["localhost", "50051"]) == 1
        assert "Usage" in capsys.readouterr().out

    def test_parse_error_prints_usage(self, capsys):
        assert main(["localhost", "50051", "get-string", "x"]) == 1
        assert "Invalid index: x" in capsys.readouterr().out

    def test_unnamed_output_prints_usage(self, capsys):
        assert main(["localhost", "50051", "get-file", "/"]) == 1
        assert "Cannot derive an output file name" in capsys.readouterr().out

"""Unit tests for data server startup argument handling."""

from dataserver import main as server_main
from dataserver.service import DataService


def test_address_from_arguments():
    assert server_main.resolve_address(["0.0.0.0", "50051"]) == ("0.0.0.0", "50051")


def test_incomplete_arguments(monkeypatch):
    monkeypatch.setattr("dataserver.config.DATA_SERVICE_HOST", "localhost")
    monkeypatch.setattr("dataserver.config.DATA_SERVICE_PORT", "50051")

    assert server_main.resolve_address(["localhost"]) is None


def test_address_from_environment(monkeypatch):
    monkeypatch.setattr("dataserver.config.DATA_SERVICE_HOST", "127.0.0.1")
    monkeypatch.setattr("dataserver.config.DATA_SERVICE_PORT", "6000")

    assert server_main.resolve_address([]) == ("127.0.0.1", "6000")


def test_no_address_prints_usage(monkeypatch, capsys):
    monkeypatch.setattr("dataserver.config.DATA_SERVICE_HOST", None)
    monkeypatch.setattr("dataserver.config.DATA_SERVICE_PORT", None)

    assert server_main.main([]) == 1

    out = capsys.readouterr().out
    assert "Usage: dataserver <hostname> <port>" in out
    assert "dataserver localhost 50051" in out


def test_describe_tables():
    summary = server_main.describe_tables(DataService())

    assert summary.startswith("4 numbers [")
    assert "three=3" in summary
    assert "5 strings [" in summary
    assert "1:bar" in summary

import socket
from unittest import mock

import pytest

from sysbits.names import lookup_addresses, lookup_name, main


def test_lookup_numeric_address():
    addresses = lookup_addresses("127.0.0.1")
    assert addresses
    assert set(addresses) == {"127.0.0.1"}


def test_lookup_addresses_skips_unknown_families():
    fake = [
        (socket.AF_INET, socket.SOCK_DGRAM, 17, "", ("192.0.2.1", 0)),
        (socket.AF_UNIX, socket.SOCK_DGRAM, 0, "", ("/tmp/x", 0)),
        (socket.AF_INET6, socket.SOCK_DGRAM, 17, "", ("2001:db8::1", 0, 0, 0)),
    ]
    with mock.patch.object(socket, "getaddrinfo", return_value=fake):
        assert lookup_addresses("example.com") == ["192.0.2.1", "2001:db8::1"]


def test_lookup_addresses_requests_datagram_any_family():
    with mock.patch.object(socket, "getaddrinfo", return_value=[]) as getaddrinfo:
        assert lookup_addresses("example.com") == []
    getaddrinfo.assert_called_once_with("example.com", None, socket.AF_UNSPEC, socket.SOCK_DGRAM)


def test_lookup_name_ipv4():
    with mock.patch.object(socket, "getnameinfo", return_value=("host.example.com", "0")) as getnameinfo:
        assert lookup_name("192.0.2.1") == "host.example.com"
    getnameinfo.assert_called_once_with(("192.0.2.1", 0), 0)


def test_lookup_name_ipv6():
    with mock.patch.object(socket, "getnameinfo", return_value=("v6.example.com", "0")) as getnameinfo:
        assert lookup_name("2001:db8::1") == "v6.example.com"
    getnameinfo.assert_called_once_with(("2001:db8::1", 0, 0, 0), 0)


def test_lookup_name_malformed():
    with pytest.raises(ValueError):
        lookup_name("not-an-address")


def test_lookup_name_missing():
    with pytest.raises(ValueError, match="Missing argument"):
        lookup_name(None)


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage: name [-n] HOST" in capsys.readouterr().err


def test_main_reverse_without_address(capsys):
    assert main(["-n"]) == 1
    assert "Missing argument" in capsys.readouterr().err


def test_main_prints_addresses(capsys):
    assert main(["127.0.0.1"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "127.0.0.1"


def test_main_reports_resolution_failure(capsys):
    error = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
    with mock.patch.object(socket, "getaddrinfo", side_effect=error):
        assert main(["nowhere.example.com"]) == 1
    assert capsys.readouterr().err.startswith("getaddrinfo: ")
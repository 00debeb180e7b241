"""
Unit tests for the Connection wrapper.
"""

import socket

import pytest

from simplewebserver.core.connection import Connection, ConnectionState

from conftest import recv_all


class TestConnection:
    """Tests for Connection class."""

    def test_initial_state(self, conn_pair):
        conn, _ = conn_pair

        assert conn.state == ConnectionState.NEW
        assert len(conn.id) == 8
        assert conn.client_ip == "local"
        assert conn.socket.gettimeout() == 2.0

    def test_reader_reads_lines(self, conn_pair):
        conn, client = conn_pair
        client.sendall(b"first\r\nsecond\r\n")

        assert conn.reader.readline() == b"first\r\n"
        assert conn.reader.readline() == b"second\r\n"
        assert conn.state == ConnectionState.READING

    def test_reader_times_out(self):
        server_sock, client_sock = socket.socketpair()
        conn = Connection(socket=server_sock, address=("local", 0), timeout=0.1)

        try:
            with pytest.raises(socket.timeout):
                conn.reader.readline()
        finally:
            conn.close()
            client_sock.close()

    def test_send(self, conn_pair):
        conn, client = conn_pair

        conn.send(b"hello")
        conn.close()

        assert recv_all(client) == b"hello"

    def test_close_is_idempotent(self, conn_pair):
        conn, client = conn_pair
        conn.reader  # create the buffered reader too

        conn.close()
        conn.close()

        assert conn.closed
        assert conn.socket.fileno() == -1
        assert recv_all(client) == b""

    def test_context_manager_closes(self, conn_pair):
        conn, client = conn_pair

        with pytest.raises(RuntimeError):
            with conn:
                conn.send(b"partial")
                raise RuntimeError("boom")

        assert conn.state == ConnectionState.CLOSED
        assert recv_all(client) == b"partial"

    def test_send_after_peer_closed_raises(self, conn_pair):
        conn, client = conn_pair
        client.close()

        with pytest.raises(OSError):
            for _ in range(100):
                conn.send(b"x" * 65536)

import json
import sys
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


class FakeKeyMintServer:
    """Loopback HTTP server answering with canned responses per (method, path)."""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), self._handler_class())
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def url(self):
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def add(self, method, path, status=200, body=None, raw=None, drip=None):
        """Register a canned response.

        ``drip`` is an optional ``(chunk_size, delay)`` pair that sends the body
        a few bytes at a time.
        """
        if raw is None:
            raw = json.dumps(body if body is not None else {})
        payload = raw.encode("utf-8") if isinstance(raw, str) else raw
        self.routes[(method, path)] = (status, payload, drip)

    def start(self):
        self._thread.start()

    def stop(self):
        self._httpd.shutdown()
        self._httpd.server_close()

    def _handler_class(self):
        server = self

        class Handler(BaseHTTPRequestHandler):
            def _serve(self):
                parts = urlsplit(self.path)
                length = int(self.headers.get("Content-Length", "0") or 0)
                raw_body = self.rfile.read(length) if length else b""
                server.requests.append(
                    {
                        "method": self.command,
                        "path": parts.path,
                        "query": {k: v[0] for k, v in parse_qs(parts.query, keep_blank_values=True).items()},
                        "headers": dict(self.headers),
                        "body": json.loads(raw_body) if raw_body else None,
                    }
                )
                status, payload, drip = server.routes.get(
                    (self.command, parts.path),
                    (404, json.dumps({"message": "Endpoint not found", "code": 404}).encode(), None),
                )
                self.send_response(status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                if drip is None:
                    self.wfile.write(payload)
                    return

                chunk_size, delay = drip
                try:
                    for start in range(0, len(payload), chunk_size):
                        self.wfile.write(payload[start:start + chunk_size])
                        self.wfile.flush()
                        time.sleep(delay)
                except (BrokenPipeError, ConnectionResetError):
                    return

            do_GET = do_POST = do_PUT = do_DELETE = _serve

            def log_message(self, format, *args):  # noqa: A002 - inherited signature
                return None

        return Handler


@pytest.fixture()
def api_server():
    server = FakeKeyMintServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture(autouse=True)
def clear_keymint_env(monkeypatch):
    for name in ("KEYMINT_ACCESS_TOKEN", "KEYMINT_API_BASE_URL", "KEYMINT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    yield

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

PROXY_VARS = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy")


@pytest.fixture(autouse=True)
def no_proxy(monkeypatch):
    for name in PROXY_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")


def make_handler(pages, delay=0.0):
    """Build a handler serving `pages` (path -> html str); other paths are 404."""

    class Handler(BaseHTTPRequestHandler):
        def _respond(self, with_body):
            if delay:
                time.sleep(delay)
            path = self.path.split("?", 1)[0]
            body = pages.get(path)
            code = 200 if body is not None else 404
            data = (body or "not found").encode()
            try:
                self.send_response(code)
                self.send_header("Content-Type", "text/html; charset=utf-8")
                self.send_header("Content-Length", str(len(data)))
                self.end_headers()
                if with_body:
                    self.wfile.write(data)
            except (BrokenPipeError, ConnectionResetError):
                pass

        def do_HEAD(self):
            self._respond(False)

        def do_GET(self):
            self._respond(True)

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def serve():
    """Start a local site; returns its base URL."""
    servers = []

    def _serve(pages, delay=0.0):
        server = ThreadingHTTPServer(("127.0.0.1", 0), make_handler(pages, delay))
        server.daemon_threads = True
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}"

    yield _serve

    for server in servers:
        server.shutdown()
        server.server_close()


SITE = {
    "/": '<a href="/about">About</a> <a href="home">Home</a> '
         '<a href="mailto:someone@example.com">Mail</a> <a href="ftp://files.example.com">Files</a>',
    "/about": '<a href="./">Root</a> <a href="/zzz">Missing</a> <a href="/home">Home</a>',
    "/home": "<p>no links here</p>",
}


@pytest.fixture
def site(serve):
    return serve(SITE)

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from otelcol_operator.autodetect import AutoDetect, Platform


def _serve(status, body):
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            payload = json.dumps(body).encode() if body is not None else b""
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, *args):
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


@pytest.fixture
def api_server():
    servers = []

    def start(status, body):
        server = _serve(status, body)
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.mark.parametrize(
    "group_list, expected",
    [
        ({}, Platform.KUBERNETES),
        ({"groups": [{"name": "route.openshift.io"}]}, Platform.OPENSHIFT),
        ({"groups": [{"name": "apps"}, {"name": "batch"}]}, Platform.KUBERNETES),
    ],
)
def test_detect_platform_based_on_available_api_groups(api_server, group_list, expected):
    url = api_server(200, {"kind": "APIGroupList", **group_list})
    assert AutoDetect(url).platform() == expected


def test_unknown_platform_on_error(api_server):
    url = api_server(500, None)
    with pytest.raises(OSError):
        AutoDetect(url).platform()


def test_trailing_slash_is_ignored(api_server):
    url = api_server(200, {"groups": [{"name": "route.openshift.io"}]})
    detector = AutoDetect(url + "/", timeout=5.0)
    assert detector.host == url
    assert detector.platform() == Platform.OPENSHIFT
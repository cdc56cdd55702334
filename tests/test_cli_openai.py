"""CLI sessions against a real ChatOpenAI talking to a local chat-completions server."""
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from typer.testing import CliRunner

from careerscope import cli
from careerscope.settings import SETTINGS

runner = CliRunner()


class _ChatHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def do_POST(self):
        length = int(self.headers.get("Content-Length") or 0)
        self.server.requests.append(json.loads(self.rfile.read(length) or b"{}"))
        body = json.dumps({
            "id": "chatcmpl-local",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-4o-mini",
            "choices": [{
                "index": 0,
                "message": {"role": "assistant", "content": self.server.reply},
                "finish_reason": "stop",
            }],
            "usage": {"prompt_tokens": 10, "completion_tokens": 10, "total_tokens": 20},
        }).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def chat_server(reply_data):
    server = ThreadingHTTPServer(("127.0.0.1", 0), _ChatHandler)
    server.reply = json.dumps(reply_data)
    server.requests = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


def test_second_submission_reuses_client(monkeypatch, chat_server):
    host, port = chat_server.server_address
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setattr(SETTINGS, "no_banner", True)
    monkeypatch.setattr(SETTINGS, "openai_api_key", "sk-local-test-key")
    monkeypatch.setattr(SETTINGS, "openai_base_url", f"http://{host}:{port}/v1")
    monkeypatch.setattr(SETTINGS, "request_timeout", 10.0)

    answers = "\n" * 5 + "y\n" + "\n" * 5 + "n\n"
    result = runner.invoke(
        cli.app,
        [
            "--role", "Data Scientist",
            "--academics", "BSc Statistics",
            "--projects", "Churn model",
            "--achievements", "Kaggle bronze",
            "--tab", "jobs",
        ],
        input=answers,
    )
    assert result.exit_code == 0, result.output
    assert "Could not reach the AI service" not in result.output
    assert result.output.count("Suitable Job Roles") == 2
    assert len(chat_server.requests) == 2
    assert chat_server.requests[0]["response_format"]["type"] == "json_schema"

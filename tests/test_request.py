"""
tests/test_request.py
Request template loading, colors and the command line entry point.
"""

import pytest

from intruder.core.colors import COLORS, color_value, localized_color_options
from intruder.core.normalizer import format_result
from intruder.main import main
from intruder.parsers.markers import extract
from intruder.parsers.request import RequestTemplate
from intruder.reporters.console import Log


RAW = "GET /users/42?id=$7$ HTTP/1.1\r\nHost: example.com\r\nX-Token: $abc$\r\n\r\n"


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "example.req"
    path.write_bytes(RAW.encode("utf-8"))
    return path


def test_load_keeps_raw_text(request_file):
    req = RequestTemplate(str(request_file))
    assert req.load() == RAW
    assert req.method == "GET"
    assert req.path == "/users/42"
    assert req.host == "example.com"
    assert req.summary()["headers"]["X-Token"] == "$abc$"


def test_positions_offsets_match_file(request_file):
    req = RequestTemplate(str(request_file))
    req.load()
    positions = req.positions()
    assert [p.param_name for p in positions] == ["GET /users/42?id", "X-Token"]
    assert [RAW[p.start:p.end] for p in positions] == ["$7$", "$abc$"]


def test_wrap_and_clear(request_file):
    req = RequestTemplate(str(request_file))
    req.load()
    assert "§example.com§" in req.wrap("example.com")
    assert req.clear() == RAW


def test_empty_file(tmp_path):
    path = tmp_path / "empty.req"
    path.write_text("  \n")
    with pytest.raises(ValueError):
        RequestTemplate(str(path)).load()


def test_leading_blank_line(tmp_path, capsys):
    path = tmp_path / "blank.req"
    path.write_text("\n\nGET / HTTP/1.1\nHost: x\n\nid=$1$")
    with pytest.raises(ValueError, match="no request line"):
        RequestTemplate(str(path)).load()
    assert main(["--request", str(path)]) == 1
    assert "[FAIL]" in capsys.readouterr().out


def test_invalid_request_line(tmp_path):
    path = tmp_path / "bad.req"
    path.write_text("GET\nHost: x\n\n")
    with pytest.raises(ValueError, match="Invalid request line"):
        RequestTemplate(str(path)).load()


def test_localized_color_options():
    labels = {"modules.intruder.red": "Rojo"}
    options = localized_color_options(lambda key: labels.get(key, key))
    assert len(options) == len(COLORS)
    assert options[0] == {"id": "default", "value": "#4f46e5",
                          "label": "modules.intruder.default_color"}
    assert options[1]["label"] == "Rojo"


def test_color_value():
    assert color_value("teal") == "#14b8a6"
    assert color_value("purple") == "#4f46e5"


def test_main_lists_positions(request_file, capsys):
    assert main(["--request", str(request_file)]) == 0
    out = capsys.readouterr().out
    assert "X-Token" in out
    assert "example.com" in out


def test_main_generates_requests(tmp_path, capsys):
    req = tmp_path / "login.req"
    req.write_text("POST /login HTTP/1.1\nHost: example.com\n\nuser=§admin§\n")
    words = tmp_path / "users.txt"
    words.write_text("root\nguest\n\n")
    assert main(["--request", str(req), "--payloads", str(words)]) == 0
    out = capsys.readouterr().out
    assert "2 requests generadas (sniper)" in out


def test_main_reports_generation_errors(request_file, tmp_path, capsys):
    words = tmp_path / "words.txt"
    words.write_text("a\n")
    # the file only carries $ markers, there is nothing to attack
    assert main(["--request", str(request_file), "--payloads", str(words)]) == 1
    assert "No payload positions found" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main(["--request", str(tmp_path / "missing.req")]) == 1
    assert "[FAIL]" in capsys.readouterr().out


def test_log_renders_positions_and_results(capsys):
    log = Log(verbose=1)
    log.position(extract("id=$1$")[0])
    log.result(format_result({"id": 1, "payload": ["a", "b"], "status": 200,
                              "length": 10, "timeMs": 5, "color": "orange"}))
    out = capsys.readouterr().out
    assert "[POSITION]" in out
    assert "[RESULT]" in out
    assert "a, b" in out
    assert "HTTP 200, 10 bytes, 5 ms" in out

import argparse

import pytest

import main
from config import METRICS_PATH


def test_defaults():
    args = main.parse_args([])
    assert args.path == METRICS_PATH
    assert args.bind == ("127.0.0.1", 9102)


def test_flags():
    args = main.parse_args(["--path", "/tmp/metrics.json", "--bind", "0.0.0.0:9200", "--verbose"])
    assert args.path == "/tmp/metrics.json"
    assert args.bind == ("0.0.0.0", 9200)
    assert args.verbose is True


@pytest.mark.parametrize("value", ["localhost", ":9102", "localhost:http", "localhost:70000"])
def test_parse_bind_rejects(value):
    with pytest.raises(argparse.ArgumentTypeError):
        main.parse_bind(value)


def test_parse_bind_ipv6():
    assert main.parse_bind("[::1]:9102") == ("::1", 9102)


def test_bad_bind_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main.parse_args(["--bind", "nope"])
    assert exc.value.code == 2


def test_main_runs_app(monkeypatch, tmp_path):
    calls = {}

    def fake_run(self, host, port, threaded):
        calls.update(host=host, port=port, threaded=threaded)

    monkeypatch.setattr("flask.Flask.run", fake_run)
    main.main(["--path", str(tmp_path / "metrics.json"), "--bind", "127.0.0.1:9999"])
    assert calls == {"host": "127.0.0.1", "port": 9999, "threaded": True}

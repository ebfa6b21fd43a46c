import json
import logging

from receitas.common.logging import JsonFormatter, logging_config


def _record(**extra):
    record = logging.LogRecord("receitas.test", logging.INFO, __file__, 1, "search_done", (), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_keeps_known_extras_only():
    line = JsonFormatter().format(_record(query="bolo", items=3, password="hunter2"))
    payload = json.loads(line)
    assert payload["msg"] == "search_done"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "receitas.test"
    assert payload["query"] == "bolo"
    assert payload["items"] == 3
    assert "password" not in payload
    assert payload["ts"].endswith("Z")


def test_logging_config_routes_uvicorn_to_root():
    cfg = logging_config("DEBUG")
    assert cfg["root"] == {"level": "DEBUG", "handlers": ["stdout"]}
    assert cfg["loggers"]["uvicorn.access"]["propagate"] is True

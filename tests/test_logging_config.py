import json
import logging

from recibo_patch.logging_config import JsonFormatter, LogContext


def _record(**extra):
    rec = logging.LogRecord("recibo_patch.patcher", logging.INFO, __file__, 1, "Located %s", ("x",), None)
    for k, v in extra.items():
        setattr(rec, k, v)
    return rec


def test_json_formatter_includes_patch_context():
    fmt = JsonFormatter(LogContext(service="recibo_patch"))
    out = json.loads(fmt.format(_record(target_path="r.dart", step="locate", insert_at=42, json={"signature": "s"})))

    assert out["msg"] == "Located x"
    assert out["service"] == "recibo_patch"
    assert out["level"] == "INFO"
    assert out["target_path"] == "r.dart"
    assert out["step"] == "locate"
    assert out["insert_at"] == 42
    assert out["signature"] == "s"


def test_json_formatter_omits_absent_keys():
    fmt = JsonFormatter(LogContext(service="recibo_patch"))
    out = json.loads(fmt.format(_record()))
    assert "insert_at" not in out
    assert "step" not in out
    assert set(out) == {"ts_utc", "level", "service", "logger", "msg"}

"""Tests for astnamer.utils.logging sinks."""

import json

from astnamer.utils.logging import (
    PINO_LEVELS,
    _to_pino,
    configure_file_logging,
    get_request_id,
    logger,
    pino_compatible_sink,
)


class TestPinoOutput:
    def test_record_renders_as_pino_json(self):
        lines = []
        handler_id = logger.add(lambda message: lines.append(_to_pino(message.record)), level="DEBUG")
        try:
            logger.bind(path="app.ast.json").info("Loaded {count} nodes", count=3)
        finally:
            logger.remove(handler_id)

        record = json.loads(lines[-1])
        assert record["level"] == PINO_LEVELS["INFO"]
        assert record["msg"] == "Loaded 3 nodes"
        assert record["path"] == "app.ast.json"
        assert record["request_id"] == get_request_id()
        assert isinstance(record["time"], int)

    def test_exception_is_reported_as_err(self):
        lines = []
        handler_id = logger.add(lambda message: lines.append(_to_pino(message.record)), level="DEBUG")
        try:
            try:
                raise ValueError("bad node")
            except ValueError:
                logger.exception("failed")
        finally:
            logger.remove(handler_id)

        record = json.loads(lines[-1])
        assert record["err"] == {"type": "ValueError", "message": "bad node"}

    def test_pino_sink_writes_to_stderr(self, capsys):
        handler_id = logger.add(pino_compatible_sink, level="DEBUG")
        try:
            logger.info("sink check")
        finally:
            logger.remove(handler_id)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["msg"] == "sink check"


class TestFileLogging:
    def test_configure_file_logging(self, tmp_path):
        handler_id = configure_file_logging(tmp_path / "logs")
        try:
            logger.debug("written to file")
        finally:
            logger.remove(handler_id)

        log_file = tmp_path / "logs" / "astnamer.log"
        assert "written to file" in log_file.read_text(encoding="utf-8")

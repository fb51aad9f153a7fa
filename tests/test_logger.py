from __future__ import annotations

import json
import logging
import sys

from varstore.logger import log


def test_logger_writes_json_to_stderr():
    assert len(log.handlers) == 1
    handler = log.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is not sys.stdout

    record = log.makeRecord("varstore", logging.WARNING, __file__, 1, "saved variable", None, None, extra={"variable": "A"})
    payload = json.loads(handler.format(record))

    assert payload["message"] == "saved variable"
    assert payload["levelname"] == "WARNING"
    assert payload["variable"] == "A"

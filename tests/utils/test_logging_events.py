#!/usr/bin/env python3
"""
Tests for logging setup and structured log events.
"""

import json
import logging
import unittest
from datetime import date
from unittest.mock import patch

from node_usage.models import UsageSnapshot
from node_usage.utils.logging import log_retry_event, log_usage_snapshot, setup_logging


def _payload(line: str, prefix: str) -> dict:
    return json.loads(line.split(f"{prefix}: ", 1)[1])


class TestStructuredEvents(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("test_node_usage_events")

    def test_usage_snapshot_record(self):
        snapshot = UsageSnapshot(quota=1000, used=200, rollover=date(2020, 3, 15))
        with self.assertLogs(self.logger, level="INFO") as logs:
            log_usage_snapshot(snapshot, 150.456, timestamp=1.0, logger=self.logger)

        record = _payload(logs.output[0], "USAGE_SNAPSHOT")
        self.assertEqual(record["event_type"], "usage_snapshot")
        self.assertEqual(record["quota"], 1000)
        self.assertEqual(record["used"], 200)
        self.assertEqual(record["remaining"], 800)
        self.assertEqual(record["target"], 150.46)
        self.assertEqual(record["rollover"], "2020-03-15")
        self.assertEqual(record["timestamp"], 1.0)

    def test_retry_event_record(self):
        with self.assertLogs(self.logger, level="INFO") as logs:
            log_retry_event(
                attempt=2, attempts_remaining=3, delay=120.0,
                error="503 Service Unavailable", worker_id="poll", logger=self.logger,
            )

        record = _payload(logs.output[0], "RETRY_EVENT")
        self.assertEqual(record["attempt"], 2)
        self.assertEqual(record["attempts_remaining"], 3)
        self.assertEqual(record["delay_seconds"], 120.0)
        self.assertEqual(record["error"], "503 Service Unavailable")
        self.assertEqual(record["worker_id"], "poll")


class TestSetupLogging(unittest.TestCase):
    def test_verbose_selects_debug(self):
        with patch("logging.basicConfig") as basic_config:
            setup_logging(verbose=True)
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.DEBUG)

    def test_default_is_info_and_quiets_http_client(self):
        with patch("logging.basicConfig") as basic_config:
            setup_logging()
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.INFO)
        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()

"""Unit tests for the periodic database check."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from django.db import OperationalError

from modules.core.tasks import monitor_database_connection, check_database

pytestmark = pytest.mark.unit


def test_check_reports_up_with_latency():
    result = check_database()
    assert result["status"] == "up"
    assert result["response_time_ms"] >= 0


def test_task_reports_up():
    assert monitor_database_connection()["status"] == "up"


def test_task_reports_down_without_raising():
    broken = MagicMock()
    broken.ensure_connection.side_effect = OperationalError("connection refused")
    with patch("modules.core.tasks.connections", {"default": broken}):
        result = monitor_database_connection()
    assert result == {"status": "down"}


def test_task_is_registered_under_its_beat_name():
    assert monitor_database_connection.name == "core.monitor_database_connection"

"""Streamlit console tests."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from streamlit.testing.v1 import AppTest

APP_PATH = Path(__file__).resolve().parents[1] / "ui" / "app.py"


def _fake_client(records):
    client = MagicMock()
    client.__enter__.return_value = client
    client.health.return_value = True
    client.list_assessments.return_value = records
    client.list_rfis.return_value = []
    return client


class TestConsoleTable:
    def test_cell_text_is_shown_literally(self):
        records = [{"id": "1", "processName": "**Bold** #1", "content": "[link](http://x)", "status": "Draft"}]

        with patch("inventory.client.InventoryClient", return_value=_fake_client(records)):
            at = AppTest.from_file(str(APP_PATH)).run(timeout=10)

        assert not at.exception
        shown = [t.value for t in at.text]
        assert "**Bold** #1" in shown
        assert "[link](http://x)" in shown

from __future__ import annotations

import importlib.util
import io
from pathlib import Path
import unittest


def _load_example():
    path = Path(__file__).resolve().parents[1] / "examples" / "console_chart" / "app_main.py"
    spec = importlib.util.spec_from_file_location("console_chart_app_main", path)
    if spec is None or spec.loader is None:
        raise AssertionError(f"unable to load example: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class ConsoleChartExampleTests(unittest.IsolatedAsyncioTestCase):
    async def test_demo_walks_hover_pin_click_and_teardown(self) -> None:
        example = _load_example()
        out = io.StringIO()
        chart = await example.run(out)
        text = out.getvalue()

        self.assertIsNone(chart.error)
        self.assertIn("== Pipeline vs Closed ==", text)
        self.assertIn("01/01/2024 | 01/08/2024 | 01/15/2024", text)
        self.assertIn("Open Pipeline: 10 / Closed: 10", text)
        self.assertIn("tooltip hidden", text)
        self.assertIn("navigate -> standard__recordPage:a0A000000000002:view", text)
        self.assertIn("chart destroyed", text)
        self.assertIn("tooltip removed", text)
        self.assertEqual(chart.tooltip.state, "hidden")


if __name__ == "__main__":
    unittest.main()

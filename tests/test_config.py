from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from multiline_chart.config import DEFAULT_MAX_POINTS, ChartConfig, load_chart_config, parse_fields_csv
from multiline_chart.errors import ChartConfigurationError, DataFetchError, error_message


def _complete(**overrides) -> ChartConfig:
    values = dict(
        record_id="001xx",
        fields_csv="Amount__c, Probability__c",
        child_object_api_name="Opportunity_Snapshot__c",
        date_field_api_name="Snapshot_Date__c",
        parent_lookup_path="Account__c",
    )
    values.update(overrides)
    return ChartConfig(**values)


class ChartConfigTests(unittest.TestCase):
    def test_parse_fields_csv_trims_and_drops_blanks(self) -> None:
        self.assertEqual(parse_fields_csv(" A , ,B,"), ("A", "B"))
        self.assertEqual(parse_fields_csv(None), ())
        self.assertEqual(parse_fields_csv(""), ())

    def test_defaults(self) -> None:
        config = ChartConfig()
        self.assertEqual(config.title, "Multi-Line Chart")
        self.assertEqual(config.max_points, DEFAULT_MAX_POINTS)
        self.assertEqual(config.max_points_limit(), 200)

    def test_missing_required_lists_absent_fields(self) -> None:
        self.assertEqual(_complete().missing_required(), ())
        self.assertEqual(_complete(record_id=None).missing_required(), ("record_id",))
        self.assertEqual(
            ChartConfig().missing_required(),
            ("record_id", "fields_csv", "child_object_api_name", "date_field_api_name", "parent_lookup_path"),
        )

    def test_blank_field_list_counts_as_missing(self) -> None:
        self.assertEqual(_complete(fields_csv=" , ").missing_required(), ("fields_csv",))

    def test_max_points_limit_parsing(self) -> None:
        self.assertEqual(_complete(max_points="50").max_points_limit(), 50)
        self.assertIsNone(_complete(max_points="abc").max_points_limit())
        self.assertIsNone(_complete(max_points=None).max_points_limit())
        self.assertIsNone(_complete(max_points="").max_points_limit())
        self.assertIsNone(_complete(max_points=0).max_points_limit())

    def test_load_chart_config_from_toml_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.toml"
            path.write_text(
                "\n".join(
                    [
                        "[chart]",
                        'title = "Pipeline"',
                        'record_id = "001xx"',
                        'fields_csv = "Amount__c,Probability__c"',
                        'child_object_api_name = "Opportunity_Snapshot__c"',
                        'date_field_api_name = "Snapshot_Date__c"',
                        'parent_lookup_path = "Account__c"',
                        "max_points = 50",
                    ]
                ),
                encoding="utf-8",
            )
            config = load_chart_config(path)
        self.assertEqual(config.title, "Pipeline")
        self.assertEqual(config.metric_fields(), ("Amount__c", "Probability__c"))
        self.assertEqual(config.max_points_limit(), 50)
        self.assertIsNone(config.date_filter)

    def test_load_chart_config_rejects_bad_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.toml"
            path.write_text("record_id = 5\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_chart_config(path)
            path.write_text('colour = "red"\n', encoding="utf-8")
            with self.assertRaises(ValueError):
                load_chart_config(path)
            with self.assertRaises(FileNotFoundError):
                load_chart_config(Path(tmp) / "missing.toml")


class _ServiceError(Exception):
    def __init__(self, body) -> None:
        super().__init__("raw failure")
        self.body = body


class ErrorMessageTests(unittest.TestCase):
    def test_structured_body_message_wins(self) -> None:
        self.assertEqual(error_message(_ServiceError({"message": "Insufficient access"})), "Insufficient access")

    def test_falls_back_to_exception_message(self) -> None:
        self.assertEqual(error_message(_ServiceError({})), "raw failure")
        self.assertEqual(error_message(DataFetchError("timed out")), "timed out")

    def test_strings_and_other_values(self) -> None:
        self.assertEqual(error_message("boom"), "boom")
        self.assertEqual(error_message(42), "42")
        self.assertEqual(error_message(RuntimeError()), "RuntimeError")

    def test_configuration_error_carries_missing_fields(self) -> None:
        exc = ChartConfigurationError(("record_id",))
        self.assertEqual(exc.missing, ("record_id",))
        self.assertEqual(str(exc), "Please configure all required parameters.")


if __name__ == "__main__":
    unittest.main()

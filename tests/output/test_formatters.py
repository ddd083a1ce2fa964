"""Tests for ServiceResult formatting."""

import json

from bagrules.output.formatters import format_result
from bagrules.services.result import ServiceError, ServiceResult


class TestFormatResult:
    def test_human_success_is_bare_count(self) -> None:
        result = ServiceResult(
            ok=True, op="bags_contained_by", data={"bag": "shiny gold bag", "count": 32}
        )
        assert format_result(result) == "32"

    def test_human_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="unique_bags_containing",
            error=ServiceError(code="RULES_CYCLE", message="The rules have a cycle: x"),
        )
        assert format_result(result) == "ERROR: The rules have a cycle: x"

    def test_human_error_without_payload(self) -> None:
        result = ServiceResult(ok=False, op="test")
        assert format_result(result) == "ERROR: Unknown error"

    def test_json_output(self) -> None:
        result = ServiceResult(ok=True, op="unique_bags_containing", data={"count": 4})
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["ok"] is True
        assert parsed["op"] == "unique_bags_containing"
        assert parsed["data"] == {"count": 4}

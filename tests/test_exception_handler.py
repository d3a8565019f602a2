from mdppet.errors import MalformedRecord, ValidationError
from mdppet.exception_handler import ErrorHandler


def test_collect_conversion_error_records_lines():
    handler = ErrorHandler()

    info = handler.collect_conversion_error(ValidationError("dup", 2, 9, source="a.md"))

    assert info["type"] == "ValidationError"
    assert info["context"] == {"source": "a.md", "identifier": "dup", "lines": [2, 9]}


def test_format_error_report():
    handler = ErrorHandler()
    assert handler.format_error_report() == ""

    handler.collect_conversion_error(MalformedRecord(4, "heading has an empty prefix"))

    report = handler.format_error_report()
    assert report == "Error: line 4: malformed record: heading has an empty prefix"
    summary = handler.get_error_summary()
    assert summary["total_errors"] == 1
    assert summary["error_types"] == {"MalformedRecord": 1}

    handler.clear_errors()
    assert handler.get_error_summary()["total_errors"] == 0

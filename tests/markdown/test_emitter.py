import json

import pytest

from mdppet.config import OutputConfig
from mdppet.errors import ValidationError
from mdppet.markdown.emitter import emit_records, render_json
from mdppet.markdown.scanner import RawRecord, scan_text
from mdppet.snippet import SnippetDocument, SnippetEntry


def _record(identifier, *, line=1, source=None, scope="", body=None, description=None):
    return RawRecord(
        heading_fields=(identifier, f"{identifier}-prefix", scope),
        description_lines=description or [],
        body_lines=body or [],
        line=line,
        source=source,
    )


def test_hello_scenario_renders_expected_compact_json():
    text = '# hello/hi/rust\n\nSay hello\n\n```rust\nprintln!("hi");\n```\n'

    document = emit_records(scan_text(text))
    output = render_json(document, OutputConfig(indent=None))

    assert output == (
        '{"hello":{"prefix":"hi","scope":"rust",'
        '"body":["println!(\\"hi\\");"],"description":["Say hello"]}}'
    )


def test_empty_document_renders_empty_object():
    document = emit_records([])

    assert render_json(document, OutputConfig(indent=None)) == "{}"
    assert render_json(document) == "{}"


def test_fields_are_always_present_and_ordered():
    document = emit_records([_record("empty")])

    payload = json.loads(render_json(document))

    assert payload == {
        "empty": {"prefix": "empty-prefix", "scope": "", "body": [], "description": []}
    }
    assert list(payload["empty"]) == ["prefix", "scope", "body", "description"]


def test_document_order_is_preserved():
    records = [_record(name, line=index) for index, name in enumerate(["zeta", "alpha", "mid"])]

    document = emit_records(records)

    assert list(document) == ["zeta", "alpha", "mid"]
    assert list(json.loads(render_json(document))) == ["zeta", "alpha", "mid"]


def test_duplicate_identifier_raises_with_both_lines():
    records = [_record("dup", line=3), _record("other", line=10), _record("dup", line=17)]

    with pytest.raises(ValidationError) as excinfo:
        emit_records(records)

    error = excinfo.value
    assert error.identifier == "dup"
    assert (error.first_line, error.second_line) == (3, 17)
    assert "'dup'" in str(error)
    assert "line 3" in str(error)
    assert "line 17" in str(error)


def test_duplicate_across_sources_names_first_source():
    records = [_record("dup", line=1, source="a.md"), _record("dup", line=5, source="b.md")]

    with pytest.raises(ValidationError) as excinfo:
        emit_records(records)

    assert excinfo.value.first_source == "a.md"
    assert str(excinfo.value).startswith("b.md: line 5")
    assert "a.md:1" in str(excinfo.value)


def test_non_ascii_kept_by_default_and_escaped_on_request():
    document = emit_records([_record("hi", description=["Rust 的 HelloWorld 代码"])])

    assert "Rust 的 HelloWorld 代码" in render_json(document)
    assert "\\u7684" in render_json(document, OutputConfig(ensure_ascii=True))


def test_rendering_is_deterministic():
    text = "# a/aa/x\n\nA\n\n```\n1\n```\n\n# b/bb\n\n```\n2\n```\n"

    first = render_json(emit_records(scan_text(text)))
    second = render_json(emit_records(scan_text(text)))

    assert first == second


def test_directly_built_document_survives_json_round_trip():
    document = SnippetDocument({})
    document.add(
        SnippetEntry(
            identifier="for",
            prefix="for",
            scope="python",
            body=["for ${1:item} in ${2:items}:", "    ${0:pass}"],
            description=["For loop", "", "  with placeholders"],
        )
    )
    document.add(SnippetEntry(identifier="quote", prefix="q", body=['"\\t"']))

    restored = SnippetDocument.model_validate(json.loads(render_json(document)))

    assert restored.to_json_dict() == document.to_json_dict()
    assert list(restored) == ["for", "quote"]
    assert restored["for"].identifier == "for"
    assert restored["quote"].scope == ""


def test_document_add_rejects_existing_identifier():
    document = SnippetDocument({})
    document.add(SnippetEntry(identifier="x", prefix="x"))

    with pytest.raises(KeyError):
        document.add(SnippetEntry(identifier="x", prefix="y"))
    assert document["x"].prefix == "x"
    assert len(document) == 1

"""Tests for front matter splitting, parsing and in-place editing."""

from datetime import datetime, timezone

import pytest

from postkit.input.frontmatter import (
    FrontMatterError,
    dump_front_matter,
    key_lines,
    parse_front_matter,
    set_front_matter_values,
    split_front_matter,
)


def test_parse_yaml_front_matter():
    text = "---\ntitle: A\ndraft: true\n---\nBody\n"

    fmt, raw, body, body_line = parse_front_matter(text)

    assert fmt == "yaml"
    assert raw == {"title": "A", "draft": True}
    assert body == "Body\n"
    assert body_line == 4


def test_parse_toml_front_matter():
    text = '+++\ntitle = "A"\ndraft = true\n+++\nHi'

    fmt, raw, body, body_line = parse_front_matter(text)

    assert fmt == "toml"
    assert raw == {"title": "A", "draft": True}
    assert body == "Hi"
    assert body_line == 5


def test_parse_json_front_matter():
    text = '{\n  "title": "A"\n}\nBody'

    fmt, raw, body, body_line = parse_front_matter(text)

    assert fmt == "json"
    assert raw == {"title": "A"}
    assert body == "Body"
    assert body_line == 4


def test_empty_block_parses_to_empty_mapping():
    fmt, raw, body, _ = parse_front_matter("---\n---\nBody")

    assert fmt == "yaml"
    assert raw == {}
    assert body == "Body"


def test_bom_and_crlf_are_accepted():
    text = "\ufeff---\r\ntitle: A\r\n---\r\nBody\r\n"

    _, raw, body, _ = parse_front_matter(text)

    assert raw == {"title": "A"}
    assert body == "Body\n"


def test_missing_front_matter_raises():
    with pytest.raises(FrontMatterError) as excinfo:
        split_front_matter("# Just a heading\n")
    assert excinfo.value.code == "missing-front-matter"
    assert excinfo.value.line == 1


def test_unterminated_front_matter_raises():
    with pytest.raises(FrontMatterError) as excinfo:
        parse_front_matter("---\ntitle: x\nBody without closing line\n")
    assert excinfo.value.code == "unterminated-front-matter"


def test_yaml_syntax_error_raises_with_code():
    with pytest.raises(FrontMatterError) as excinfo:
        parse_front_matter("---\ntitle: ok\ntags: [a, b\n---\n")
    assert excinfo.value.code == "front-matter-syntax"
    assert "YAML" in excinfo.value.message


def test_impossible_yaml_timestamp_raises_with_code():
    with pytest.raises(FrontMatterError) as excinfo:
        parse_front_matter("---\ntitle: ok\ndate: 2024-02-30\n---\n")
    assert excinfo.value.code == "front-matter-syntax"


def test_toml_syntax_error_raises_with_code():
    with pytest.raises(FrontMatterError) as excinfo:
        parse_front_matter("+++\ntitle = \n+++\n")
    assert excinfo.value.code == "front-matter-syntax"


def test_non_mapping_front_matter_raises():
    with pytest.raises(FrontMatterError) as excinfo:
        parse_front_matter("---\n- a\n- b\n---\n")
    assert excinfo.value.code == "front-matter-not-mapping"


def test_set_values_edits_only_the_changed_yaml_line():
    text = '---\n# keep me\ntitle: "A"\ndraft: true\n---\nBody\n'

    updated = set_front_matter_values(text, {"draft": False})

    assert updated == '---\n# keep me\ntitle: "A"\ndraft: false\n---\nBody\n'


def test_set_values_matches_keys_case_insensitively():
    text = "---\nDraft: true\n---\n"

    updated = set_front_matter_values(text, {"draft": False})

    assert updated == "---\nDraft: false\n---\n"


def test_set_values_appends_missing_yaml_key():
    text = "---\ntitle: A\n---\nBody"
    when = datetime(2025, 1, 2, 9, 0, tzinfo=timezone.utc)

    updated = set_front_matter_values(text, {"draft": False, "date": when})

    assert updated == "---\ntitle: A\ndraft: false\ndate: 2025-01-02T09:00:00+00:00\n---\nBody"


def test_set_values_replaces_multiline_yaml_value():
    text = "---\ndate:\n  2024-01-01\ntitle: A\n---\n"
    when = datetime(2025, 1, 2, tzinfo=timezone.utc)

    updated = set_front_matter_values(text, {"date": when})

    assert updated == "---\ndate: 2025-01-02T00:00:00+00:00\ntitle: A\n---\n"


def test_set_values_in_toml_keeps_keys_before_tables():
    text = '+++\ntitle = "A"\n[params]\nx = 1\n+++\n'

    updated = set_front_matter_values(text, {"draft": False})

    assert updated == '+++\ntitle = "A"\ndraft = false\n[params]\nx = 1\n+++\n'
    _, raw, _, _ = parse_front_matter(updated)
    assert raw["draft"] is False
    assert raw["params"] == {"x": 1}


def test_set_values_in_toml_replaces_existing_key():
    text = '+++\ndraft = true\n+++\n'

    assert set_front_matter_values(text, {"draft": False}) == "+++\ndraft = false\n+++\n"


def test_set_values_in_json_reserializes():
    text = '{"title": "A", "draft": true}\nBody'

    updated = set_front_matter_values(text, {"draft": False})
    _, raw, body, _ = parse_front_matter(updated)

    assert raw == {"title": "A", "draft": False}
    assert body == "Body"


def test_set_values_keeps_crlf_and_bom():
    text = "\ufeff---\r\ndraft: true\r\n---\r\nBody\r\n"

    updated = set_front_matter_values(text, {"draft": False})

    assert updated == "\ufeff---\r\ndraft: false\r\n---\r\nBody\r\n"


def test_key_lines_maps_top_level_keys():
    text = "---\ntitle: A\ntags:\n  - x\nShowToc: true\n---\nBody"

    assert key_lines(text) == {"title": 2, "tags": 3, "showtoc": 5}


def test_key_lines_is_empty_for_json():
    assert key_lines('{"title": "A"}\n') == {}


def test_dump_front_matter_round_trips_through_parser():
    block = dump_front_matter({"title": "Hello: world", "tags": [], "draft": True})

    _, raw, body, _ = parse_front_matter(block + "\nText\n")

    assert raw == {"title": "Hello: world", "tags": [], "draft": True}
    assert body == "\nText\n"

from __future__ import annotations

import pytest

from htmlinpy.edit import DELETE, PASS, Delete, PassThrough, Replace, as_directive, edit, lines


def test_lines_splits_on_every_newline_variant() -> None:
    assert lines("a\nb\rc\r\nd\n\re") == ["a", "b", "c", "d", "e"]


def test_pass_through_transform_reproduces_input() -> None:
    text = "<html>\n  <title>X</title>\n</html>"
    assert edit(text, lambda line: None) == text


def test_pass_through_normalizes_line_terminators() -> None:
    assert edit("one\r\ntwo\rthree", lambda line: None) == "one\ntwo\nthree"


def test_single_replace_substitutes_matching_line() -> None:
    text = "<head>\n<title>Old</title>\n</head>"
    result = edit(text, lambda line: "<title>New</title>" if "<title>" in line else None)
    assert result == "<head>\n<title>New</title>\n</head>"


def test_multi_replace_expands_one_line_into_many() -> None:
    result = edit("a\nmarker\nb", lambda line: ["x", "y", "z"] if line == "marker" else None)
    assert result == "a\nx\ny\nz\nb"


def test_delete_removes_line() -> None:
    result = edit("keep\ndrop\nkeep", lambda line: DELETE if line == "drop" else None)
    assert result == "keep\nkeep"


def test_empty_sequence_emits_nothing_but_empty_string_passes_through() -> None:
    assert edit("a\nb", lambda line: [] if line == "a" else None) == "b"
    assert edit("a\nb", lambda line: "") == "a\nb"


def test_falsy_results_pass_through() -> None:
    assert edit("a\nb", lambda line: False) == "a\nb"
    assert edit("a\nb", lambda line: 0) == "a\nb"


def test_short_circuit_transform_replaces_only_matches() -> None:
    text = "a\n<title>X</title>\nb"
    result = edit(text, lambda line: "<title>" in line and "<title>Y</title>")
    assert result == "a\n<title>Y</title>\nb"


def test_every_matching_line_is_transformed() -> None:
    result = edit("x\ny\nx", lambda line: "X" if line == "x" else None)
    assert result == "X\ny\nX"


def test_first_match_only_uses_closure_state() -> None:
    seen = {"done": False}

    def first_only(line: str) -> str | None:
        if line == "x" and not seen["done"]:
            seen["done"] = True
            return "X"
        return None

    assert edit("x\nx", first_only) == "X\nx"


def test_output_line_count_matches_directives() -> None:
    source = ["pass", "one", "three", "gone"]

    def transform(line: str):
        return {"one": "1", "three": ["a", "b", "c"], "gone": DELETE}.get(line)

    assert len(lines(edit("\n".join(source), transform))) == 0 + 1 + 1 + 3


def test_explicit_directives_are_accepted() -> None:
    result = edit("a\nb\nc", lambda line: {"a": PASS, "b": Replace.of("B1", "B2"), "c": Delete()}[line])
    assert result == "a\nB1\nB2"


def test_as_directive_rejects_unknown_values() -> None:
    assert isinstance(as_directive(None), PassThrough)
    assert as_directive("x") == Replace(lines=("x",))
    with pytest.raises(TypeError):
        as_directive(42)  # type: ignore[arg-type]

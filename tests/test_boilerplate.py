from __future__ import annotations

from pathlib import Path

import pytest

from htmlinpy.boilerplate import (
    BoilerplateNotFoundError,
    find_references,
    load_boilerplate,
    locate_boilerplate,
)

MODULE = "node_modules/html5-boilerplate/dist"

TEMPLATE = """<!doctype html>
<html lang="">
<head>
  <title></title>
  <link rel="stylesheet" href="css/style.css">
  <link rel="stylesheet" href="https://cdn.example.com/normalize.css">
  <link rel="manifest" href="site.webmanifest">
</head>
<body>
  <p>Hello world! This is HTML5 Boilerplate.</p>
  <script src="js/app.js"></script>
</body>
</html>
"""


def _make_boilerplate(root: Path) -> Path:
    dist = root / MODULE
    (dist / "css").mkdir(parents=True)
    (dist / "js").mkdir()
    (dist / "index.html").write_text(TEMPLATE, encoding="utf-8")
    (dist / "css" / "style.css").write_text("body { margin: 0; }", encoding="utf-8")
    (dist / "js" / "app.js").write_text("console.log('hi');", encoding="utf-8")
    (dist / "site.webmanifest").write_text("{}", encoding="utf-8")
    return dist


def test_find_references_excludes_absolute_urls() -> None:
    html = '<link href="http://x.com/a.css"><script src="js/app.js">'
    assert find_references(html) == ["js/app.js"]


def test_find_references_keeps_document_order_and_duplicates() -> None:
    html = '<script src="js/a.js"></script><link href="css/b.css"><img src="js/a.js">'
    assert find_references(html) == ["js/a.js", "css/b.css", "js/a.js"]


def test_find_references_ignores_single_quoted_values() -> None:
    assert find_references("<link href='css/a.css'>") == []


def test_locate_walks_up_from_anchor(tmp_path: Path) -> None:
    dist = _make_boilerplate(tmp_path)
    anchor = tmp_path / "project" / "nested" / "deeper"
    anchor.mkdir(parents=True)

    assert locate_boilerplate(MODULE, anchor) == dist.resolve()


def test_locate_prefers_nearest_match(tmp_path: Path) -> None:
    _make_boilerplate(tmp_path)
    inner = _make_boilerplate(tmp_path / "project")
    assert locate_boilerplate(MODULE, tmp_path / "project") == inner.resolve()


def test_locate_returns_none_when_missing(tmp_path: Path) -> None:
    assert locate_boilerplate("no-such-module/dist-for-tests", tmp_path) is None


def test_load_raises_when_boilerplate_missing(tmp_path: Path) -> None:
    with pytest.raises(BoilerplateNotFoundError):
        load_boilerplate(tmp_path / "site", module_path="no-such-module/dist-for-tests", anchor=tmp_path)


def test_load_without_output_root_only_reads(tmp_path: Path) -> None:
    _make_boilerplate(tmp_path)
    html = load_boilerplate(anchor=tmp_path, module_path=MODULE)
    assert html == TEMPLATE
    assert not (tmp_path / "site").exists()


def test_load_mirrors_local_assets(tmp_path: Path) -> None:
    _make_boilerplate(tmp_path)
    output = tmp_path / "site"

    load_boilerplate(output, module_path=MODULE, anchor=tmp_path)

    assert (output / "css" / "style.css").read_text(encoding="utf-8") == "body { margin: 0; }"
    assert (output / "js" / "app.js").exists()
    assert (output / "site.webmanifest").exists()
    assert not (output / "cdn.example.com").exists()


def test_missing_referenced_asset_aborts_load(tmp_path: Path) -> None:
    dist = _make_boilerplate(tmp_path)
    (dist / "index.html").write_text(
        TEMPLATE.replace("css/style.css", "css/missing.css"),
        encoding="utf-8",
    )

    with pytest.raises(FileNotFoundError):
        load_boilerplate(tmp_path / "site", module_path=MODULE, anchor=tmp_path)


def test_existing_destination_is_never_overwritten(tmp_path: Path) -> None:
    _make_boilerplate(tmp_path)
    output = tmp_path / "site"
    customised = output / "css" / "style.css"
    customised.parent.mkdir(parents=True)
    customised.write_text("/* local override */", encoding="utf-8")

    load_boilerplate(output, module_path=MODULE, anchor=tmp_path)

    assert customised.read_text(encoding="utf-8") == "/* local override */"

from pathlib import Path

from docmodel.fileset import collect_module_files


def _write_file(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_fs_001_collects_modules_in_sorted_breadth_first_order(tmp_path: Path) -> None:
    _write_file(tmp_path / "z.js")
    _write_file(tmp_path / "a.js")
    _write_file(tmp_path / "lib" / "language" / "ModuleParser.js")
    _write_file(tmp_path / "lib" / "util.min.js")
    _write_file(tmp_path / "README.md")

    files = collect_module_files(tmp_path)

    assert [f.name for f in files] == [
        "a",
        "z",
        "lib/util.min",
        "lib/language/ModuleParser",
    ]
    assert files[3].doc_path == "lib/language/ModuleParser.html"
    assert files[2].doc_path == "lib/util.min.html"
    assert files[0].full_path == str(tmp_path / "a.js")


def test_fs_002_honours_root_and_nested_gitignore(tmp_path: Path) -> None:
    _write_file(tmp_path / ".gitignore", "node_modules/\n")
    _write_file(tmp_path / "node_modules" / "dep" / "index.js")
    _write_file(tmp_path / "src" / ".gitignore", "/generated.js\n")
    _write_file(tmp_path / "src" / "generated.js")
    _write_file(tmp_path / "src" / "kept.js")
    _write_file(tmp_path / ".git" / "hooks" / "x.js")

    files = collect_module_files(tmp_path)

    assert [f.name for f in files] == ["src/kept"]


def test_fs_003_custom_suffixes(tmp_path: Path) -> None:
    _write_file(tmp_path / "a.json", "[]")
    _write_file(tmp_path / "b.js")

    files = collect_module_files(tmp_path, suffixes=(".json",))

    assert [(f.name, f.doc_path) for f in files] == [("a", "a.html")]


def test_fs_004_nested_slashless_pattern_matches_at_any_depth(tmp_path: Path) -> None:
    _write_file(tmp_path / "src" / ".gitignore", "*.min.js\nbuild/\n")
    _write_file(tmp_path / "src" / "a.min.js")
    _write_file(tmp_path / "src" / "deep" / "b.min.js")
    _write_file(tmp_path / "src" / "deep" / "build" / "out.js")
    _write_file(tmp_path / "src" / "deep" / "kept.js")
    _write_file(tmp_path / "other.min.js")

    files = collect_module_files(tmp_path)

    assert [f.name for f in files] == ["other.min", "src/deep/kept"]

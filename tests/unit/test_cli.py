import io
import json
import re
from pathlib import Path

from cli.docmodel_cli import run

_DOX_DUMP = [
    {
        "tags": [],
        "description": {"full": "Shapes.", "summary": "Shapes.", "body": ""},
        "code": "(function () {",
    },
    {
        "tags": [],
        "description": {"full": "A shape.", "summary": "A shape.", "body": ""},
        "isPrivate": False,
        "isConstructor": True,
        "ctx": {"type": "function", "name": "Shape"},
    },
    {
        "tags": [],
        "description": {"full": "Area.", "summary": "Area.", "body": ""},
        "isPrivate": False,
        "ctx": {"type": "method", "name": "area", "constructor": "Shape"},
    },
    {
        "tags": [],
        "description": {"full": "Helper.", "summary": "Helper.", "body": ""},
        "isPrivate": False,
        "ctx": {"type": "function", "name": "helper"},
    },
]


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def test_cli_001_json_output_from_dox_dumps(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _write_file(project_root / "shapes.json", json.dumps(_DOX_DUMP))
    output_path = tmp_path / "out" / "modules.json"
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "parse",
            "--path",
            str(project_root),
            "--parser",
            "dox-json",
            "--format",
            "json",
            "--output",
            str(output_path),
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert stderr.getvalue() == ""
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["errors"] == []
    (module,) = payload["modules"]
    assert module["name"] == "shapes"
    assert module["path"] == "shapes.html"
    assert module["description"] == "<p>Shapes.</p>\n"
    assert module["classes"][0]["constructor"]["context"]["name"] == "Shape"
    assert [m["context"]["name"] for m in module["classes"][0]["methods"]] == ["area"]
    assert [f["context"]["name"] for f in module["functions"]] == ["helper"]


def test_cli_002_json_output_is_deterministic(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _write_file(project_root / "shapes.json", json.dumps(_DOX_DUMP))
    _write_file(project_root / "broken.json", "{oops")
    argv = ["parse", "--path", str(project_root), "--parser", "dox-json", "--format", "json"]

    first = io.StringIO()
    second = io.StringIO()
    assert run(argv, stdout=first, stderr=io.StringIO()) == 0
    assert run(argv, stdout=second, stderr=io.StringIO()) == 0

    assert first.getvalue() == second.getvalue()
    payload = json.loads(first.getvalue())
    assert [m["name"] for m in payload["modules"]] == ["broken", "shapes"]
    assert payload["modules"][0]["functions"] == []


def test_cli_003_table_output_lists_members(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _write_file(project_root / "shapes.json", json.dumps(_DOX_DUMP))
    stdout = io.StringIO()

    exit_code = run(
        ["parse", "--path", str(project_root), "--parser", "dox-json"],
        stdout=stdout,
        stderr=io.StringIO(),
    )

    output = _strip_ansi(stdout.getvalue())
    assert exit_code == 0
    assert "shapes -> shapes.html" in output
    assert "Shape" in output
    assert "area" in output
    assert "helper" in output


def test_cli_004_missing_path_returns_error(tmp_path: Path) -> None:
    stderr = io.StringIO()

    exit_code = run(
        ["parse", "--path", str(tmp_path / "missing")],
        stdout=io.StringIO(),
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Path is not a directory" in stderr.getvalue()


def test_cli_005_invalid_processor_reference_returns_error(tmp_path: Path) -> None:
    stderr = io.StringIO()

    exit_code = run(
        ["parse", "--path", str(tmp_path), "--processor", "nope"],
        stdout=io.StringIO(),
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Invalid configuration" in stderr.getvalue()


def test_cli_006_require_processor_populates_dependencies(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    requiring = _DOX_DUMP + [
        {
            "tags": [],
            "code": 'var marked = require("marked"), d = require("Deferred");',
            "ctx": {"type": "declaration", "name": "marked"},
        }
    ]
    _write_file(project_root / "shapes.json", json.dumps(requiring))
    stdout = io.StringIO()

    exit_code = run(
        [
            "parse",
            "--path",
            str(project_root),
            "--parser",
            "dox-json",
            "--processor",
            "require",
            "--format",
            "json",
        ],
        stdout=stdout,
        stderr=io.StringIO(),
    )

    assert exit_code == 0
    payload = json.loads(stdout.getvalue())
    module = payload["modules"][0]
    assert [d["name"] for d in module["dependencies"]] == ["Deferred", "marked"]
    assert module["variables"] == []


def test_cli_007_invalid_arguments_return_error() -> None:
    assert run(["parse"], stdout=io.StringIO(), stderr=io.StringIO()) == 2

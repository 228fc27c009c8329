import json
import logging
from pathlib import Path
from textwrap import dedent

import pytest

from flowcut import cli
from flowcut.logging import reset_logging, setup_root_logger

GRAPH = dedent(
    """
    nodes:
      - {id: s, label: S}
      - {id: a, label: A}
      - {id: b, label: B}
      - {id: t, label: T}
    edges:
      - {id: sa, source: s, target: a, capacity: 10}
      - {id: sb, source: s, target: b, capacity: 10}
      - {id: ab, source: a, target: b, capacity: 1}
      - {id: at, source: a, target: t, capacity: 10}
      - {id: bt, source: b, target: t, capacity: 10}
    source: s
    sink: t
    """
)


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    path = tmp_path / "graph.yaml"
    path.write_text(GRAPH, encoding="utf-8")
    return path


def test_run_prints_report(graph_file: Path, capsys) -> None:
    cli.main(["run", str(graph_file)])
    out = capsys.readouterr().out
    assert "Maximum flow: 20" in out
    assert "S -> A -> T" in out
    assert "S -> B -> T" in out
    assert "Minimum cut (2 edges):" in out
    assert "Source side: {S}" in out


def test_run_stdout_json(graph_file: Path, capsys) -> None:
    cli.main(["run", str(graph_file), "--stdout"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["result"]["max_flow"] == 20
    assert payload["result"]["min_cut"]["edges"] == ["sa", "sb"]
    assert payload["result"]["augmenting_paths"] == [
        {"path": ["s", "a", "t"], "flow": 10},
        {"path": ["s", "b", "t"], "flow": 10},
    ]
    assert payload["graph"]["source"] == "s"


def test_run_writes_results_file(graph_file: Path, tmp_path: Path, capsys) -> None:
    results_path = tmp_path / "out" / "res.json"
    cli.main(["run", str(graph_file), "--results", str(results_path)])

    assert "Results written to" in capsys.readouterr().out
    data = json.loads(results_path.read_text())
    assert data["result"]["edge_flows"] == {
        "sa": 10,
        "sb": 10,
        "ab": 0,
        "at": 10,
        "bt": 10,
    }


def test_run_overrides_terminals(graph_file: Path, capsys) -> None:
    cli.main(["run", str(graph_file), "--source", "A", "-t", "b", "--stdout"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["result"]["max_flow"] == 1
    assert payload["graph"]["source"] == "a"
    assert payload["graph"]["sink"] == "b"


def test_run_missing_file(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(tmp_path / "nope.yaml")])
    assert exc_info.value.code == 1
    assert "Graph file not found" in capsys.readouterr().out


def test_run_without_sink_fails(tmp_path: Path, capsys) -> None:
    path = tmp_path / "g.yaml"
    path.write_text("nodes: [S, T]\nsource: S\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(path)])
    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "GraphEditError" in out
    assert "Please set both source and sink nodes." in out


def test_run_unknown_override(graph_file: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(graph_file), "--source", "Z"])
    assert exc_info.value.code == 1
    assert "Failed to compute max flow" in capsys.readouterr().out


def test_inspect(graph_file: Path, capsys) -> None:
    cli.main(["inspect", str(graph_file)])
    out = capsys.readouterr().out
    assert "FLOWCUT GRAPH INSPECTION" in out
    assert "Nodes: 4   Edges: 5" in out
    assert "Source: S   Sink: T" in out
    assert "must both be set" not in out


def test_inspect_warns_without_terminals(tmp_path: Path, capsys) -> None:
    path = tmp_path / "g.yaml"
    path.write_text("nodes: [A]\n", encoding="utf-8")
    cli.main(["inspect", str(path)])
    assert "Source and sink must both be set" in capsys.readouterr().out


def test_inspect_invalid_schema(tmp_path: Path, capsys) -> None:
    path = tmp_path / "g.yaml"
    path.write_text("unexpected: true\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["inspect", str(path)])
    assert exc_info.value.code == 1
    assert "Failed to inspect graph: ValidationError" in capsys.readouterr().out


def test_no_args_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: flowcut" in capsys.readouterr().out


def test_verbose_and_quiet_set_levels(graph_file: Path) -> None:
    cli.main(["--verbose", "run", str(graph_file)])
    assert logging.getLogger("flowcut").level == logging.DEBUG
    cli.main(["--quiet", "run", str(graph_file)])
    assert logging.getLogger("flowcut").level == logging.WARNING


def test_format_duration() -> None:
    assert cli._format_duration(0.1234) == "123.4 ms"
    assert cli._format_duration(2.5) == "2.50 s"


def test_environment_log_level_kept_without_flags(
    graph_file: Path, monkeypatch
) -> None:
    monkeypatch.setenv("FLOWCUT_LOG_LEVEL", "DEBUG")
    reset_logging()
    setup_root_logger()
    cli.main(["run", str(graph_file)])
    assert logging.getLogger("flowcut").level == logging.DEBUG


def test_quiet_overrides_environment_log_level(
    graph_file: Path, monkeypatch
) -> None:
    monkeypatch.setenv("FLOWCUT_LOG_LEVEL", "DEBUG")
    reset_logging()
    setup_root_logger()
    cli.main(["--quiet", "run", str(graph_file)])
    assert logging.getLogger("flowcut").level == logging.WARNING


def test_default_level_is_info(graph_file: Path, monkeypatch) -> None:
    monkeypatch.delenv("FLOWCUT_LOG_LEVEL", raising=False)
    reset_logging()
    setup_root_logger()
    cli.main(["run", str(graph_file)])
    assert logging.getLogger("flowcut").level == logging.INFO

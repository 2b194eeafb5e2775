#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Test the command-line interface
"""

import io
import json

import pytest
from rich.console import Console

from TextSearchEngine.main import TextSearchCLI, main
from TextSearchEngine.session import SearchSession


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, record=True, color_system=None)


@pytest.fixture
def docs_dir(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "a.txt").write_text("the cat sat", encoding="utf-8")
    (docs / "b.txt").write_text("the cat ran ran", encoding="utf-8")
    return docs


def test_one_shot_search_and_export(docs_dir, tmp_path, console):
    export_path = tmp_path / "index.json"

    code = main([
        "--files", str(docs_dir),
        "--language", "en",
        "--query", "cat",
        "--show", "both",
        "--export", str(export_path),
    ], console=console)

    assert code == 0
    data = json.loads(export_path.read_text(encoding="utf-8"))
    assert data["metadata"]["query"] == "cat"
    assert data["index"]["vocabulary"] == ["cat", "ran", "sat"]
    assert data["results"]["dot"] == [["a.txt", 1.0], ["b.txt", 0.5]]
    assert [name for name, _ in data["results"]["cosine"]] == ["a.txt", "b.txt"]

    output = console.export_text()
    assert "Term Frequency - Inverse Document Frequency" in output
    assert "0.5000" in output
    assert "a.txt" in output


def test_query_without_documents_fails(console):
    assert main(["--query", "cat"], console=console) == 1
    assert "No documents uploaded" in console.export_text()


def test_invalid_config_fails(tmp_path, console):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")
    assert main(["--config", str(path), "--query", "cat"], console=console) == 1


def test_display_results_limits_rows(normalizer, console):
    session = SearchSession(normalizer=normalizer)
    session.add_documents({"a.txt": "the cat sat", "b.txt": "the cat ran ran", "c.txt": "dogs"})
    cli = TextSearchCLI(session=session, console=console)

    assert cli.index_documents()
    results = cli.search("cat", "cosine")
    cli.display_results(results, "cosine", top=2)

    output = console.export_text()
    assert "Showing 2 of 3 documents" in output
    assert "0.7071" in output


def test_interactive_requires_index_before_search(normalizer, console, monkeypatch):
    session = SearchSession(normalizer=normalizer)
    session.add_document("a.txt", "the cat sat")
    cli = TextSearchCLI(session=session, console=console)

    answers = iter(["5", "2", "5", "cat", "1", "6"])
    monkeypatch.setattr(console, "input", lambda prompt="": next(answers))

    cli.interactive_mode()

    output = console.export_text()
    assert "Invalid or unavailable choice" in output
    assert session.last_results == [("a.txt", 1.0)]


def test_bracketed_query_and_names_are_printed_literally(docs_dir, console):
    (docs_dir / "[b]notes.txt").write_text("cat [/b] notes", encoding="utf-8")

    code = main([
        "--files", str(docs_dir),
        "--language", "en",
        "--query", "cat [/b]",
        "--show", "tf",
    ], console=console)

    assert code == 0
    output = console.export_text()
    assert "cat [/b]" in output
    assert "[b]notes.txt" in output

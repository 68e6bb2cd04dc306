"""Test the ``slideseg`` command line."""

import json
import logging

import pytest

from slide_segmenter.segmenter import main


@pytest.fixture
def deck_file(tmp_path, sample_deck):
    path = tmp_path / "deck.md"
    path.write_text(sample_deck, encoding="utf-8")
    return path


def test_json_output(deck_file, capsys):
    main([str(deck_file)])
    data = json.loads(capsys.readouterr().out)

    assert len(data) == 2
    assert data[0]["kind"] == "leaf"
    assert data[0]["sourceRange"] == [0, 2]
    assert data[1]["kind"] == "stack"
    assert data[1]["children"][2]["notes"] == "thank the team"


def test_outline_output(deck_file, capsys):
    main([str(deck_file), "--format", "outline"])
    out = capsys.readouterr().out.splitlines()

    assert out == [
        "[0.0] Welcome  (lines 1-3)",
        "[1.0] Results  (lines 7-8)",
        "    [1.1] Results - Accuracy  (lines 9-10)",
        "    [1.2] (untitled)  (lines 12-13)",
    ]


def test_animation_and_alignment_flags(deck_file, capsys):
    main([str(deck_file), "-a", "fade-up", "--align", "left"])
    data = json.loads(capsys.readouterr().out)

    assert data[0]["alignment"] == "left"
    assert data[0]["animation"] == "fade-up"
    assert 'class="fragment fade-up"' in data[0]["content"]


def test_reveal_output_to_file(deck_file, tmp_path):
    target = tmp_path / "out" / "slides.html"
    main([str(deck_file), "--format", "reveal", "-o", str(target)])

    html = target.read_text(encoding="utf-8")
    assert html.count("<section data-markdown>") == 4
    assert "Note:\nthank the team" in html


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.md")])
    assert excinfo.value.code == 1


def test_unknown_animation_warns_with_catalog(deck_file, capsys, caplog):
    with caplog.at_level(logging.WARNING):
        main([str(deck_file), "-a", "wobble"])

    assert "'wobble' is not one of none, fade-out, fade-up" in caplog.text
    data = json.loads(capsys.readouterr().out)
    assert data[0]["animation"] == "wobble"


def test_known_animation_does_not_warn(deck_file, capsys, caplog):
    with caplog.at_level(logging.WARNING):
        main([str(deck_file), "-a", "grow"])
    assert "not one of" not in caplog.text

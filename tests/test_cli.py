"""Tests for the ``python -m biaslens`` entry point."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

from biaslens.__main__ import EXIT_ANALYSIS_FAILED, EXIT_NO_CONTENT, EXIT_OK, main
from biaslens.bias import ANALYSIS_FAILED_MESSAGE, NO_BIAS_MESSAGE, AnalysisUnavailable
from biaslens.items import Annotation

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BBC = str(FIXTURES_DIR / "bbc_article.html")
EMPTY = str(FIXTURES_DIR / "no_article.html")


def test_json_output(capsys):
    assert main([BBC, "--source", "bbc", "--json", "--log-level", "ERROR"]) == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["metadata"]["title"] == "Council approves new housing plan"
    assert data["source"] == "bbc"
    assert data["blocks"][0] == {
        "index": 0, "kind": "heading", "text": "Council approves new housing plan",
    }


def test_source_detected_from_url(capsys):
    rc = main([BBC, "--url", "https://www.bbc.com/news/articles/c0abc123", "--json",
               "--log-level", "ERROR"])
    assert rc == EXIT_OK
    assert json.loads(capsys.readouterr().out)["extraction_method"] == "adapter"


def test_no_content_exit_code(capsys):
    assert main([EMPTY, "--source", "bbc", "--log-level", "ERROR"]) == EXIT_NO_CONTENT
    assert "No article text found" in capsys.readouterr().err


def test_analysis_failure_exit_code(capsys):
    failing = AsyncMock(side_effect=AnalysisUnavailable("down", status=500))
    with patch("biaslens.bias.BiasClient.classify", failing):
        rc = main([BBC, "--source", "bbc", "--analyze", "--log-level", "ERROR"])
    assert rc == EXIT_ANALYSIS_FAILED
    captured = capsys.readouterr()
    assert ANALYSIS_FAILED_MESSAGE in captured.err
    assert "Council approves" not in captured.out


def test_analysis_no_bias(capsys):
    with patch("biaslens.bias.BiasClient.classify", AsyncMock(return_value=[])):
        rc = main([BBC, "--source", "bbc", "--analyze", "--log-level", "ERROR"])
    assert rc == EXIT_OK
    assert NO_BIAS_MESSAGE in capsys.readouterr().out


def test_analysis_json(capsys):
    annotations = [Annotation(index=1, text="t", label="framing", reason="r")]
    with patch("biaslens.bias.BiasClient.classify", AsyncMock(return_value=annotations)):
        rc = main([BBC, "--source", "bbc", "--analyze", "--json", "--log-level", "ERROR"])
    assert rc == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["blocks"][1]["label"] == "framing"
    assert data["annotations"][0]["index"] == 1


def test_list_sources(capsys):
    assert main(["-", "--list-sources", "--log-level", "ERROR"]) == EXIT_OK
    out = capsys.readouterr().out
    for name in ("cbs", "guardian", "bbc", "generic"):
        assert name in out

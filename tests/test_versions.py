"""Tests for version specification parsing."""

from __future__ import annotations

from datetime import datetime

import pytest

from tfvc.exceptions import VersionSpecParseError
from tfvc.models.versions import (
    LATEST,
    ChangesetVersionSpec,
    DateVersionSpec,
    LabelVersionSpec,
    WorkspaceVersionSpec,
    parse_version_spec,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("T", LATEST),
        ("t", LATEST),
        ("C42", ChangesetVersionSpec(42)),
        ("42", ChangesetVersionSpec(42)),
        ("Lrelease", LabelVersionSpec("release")),
        ("Lrelease@$/proj", LabelVersionSpec("release", "$/proj")),
        ("D2024-01-31", DateVersionSpec(datetime(2024, 1, 31))),
        ("D01/31/2024", DateVersionSpec(datetime(2024, 1, 31))),
        ("W", WorkspaceVersionSpec()),
        ("Wbuild@alice", WorkspaceVersionSpec("build", "alice")),
    ],
)
def test_parse(text, expected):
    assert parse_version_spec(text) == expected


@pytest.mark.parametrize(
    "spec, text",
    [
        (LATEST, "T"),
        (ChangesetVersionSpec(7), "C7"),
        (LabelVersionSpec("v1", "$/p"), "Lv1@$/p"),
        (WorkspaceVersionSpec("ws", "bob"), "Wws@bob"),
        (WorkspaceVersionSpec(), "W"),
    ],
)
def test_to_text(spec, text):
    assert spec.to_text() == text


@pytest.mark.parametrize("text", ["", "  ", "Cabc", "C0", "L", "L@scope", "Tx", "Dnotadate", "D", "Q5"])
def test_invalid(text):
    with pytest.raises(VersionSpecParseError):
        parse_version_spec(text)


def test_changeset_must_be_positive():
    with pytest.raises(VersionSpecParseError):
        ChangesetVersionSpec(0)

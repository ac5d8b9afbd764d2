"""Shared pytest fixtures for the theme converter tests."""

import json

import pytest


@pytest.fixture
def blackboard_theme():
  """A trimmed down VS Code theme covering every scope form."""
  return {
    "name" : "Blackboard",
    "type" : "dark",
    "colors" : {
      "editor.background" : "#0C1021",
      "editor.foreground" : "#F8F8F8",
      "editorCursor.foreground" : "#FFFFFFA6",
      "some.unknownKey" : "#123456",
    },
    "tokenColors" : [
      {"scope" : "comment", "settings" : {"foreground" : "#AEAEAE", "fontStyle" : "italic"}},
      {"scope" : "string, string.quoted", "settings" : {"foreground" : "#61CE3C"}},
      {"scope" : ["keyword", "storage"], "settings" : {"foreground" : "#FBDE2D"}},
      {"scope" : "invalid", "settings" : {"foreground" : "#F8F8F8", "background" : "#9D1E15"}},
    ],
  }


@pytest.fixture
def write_json(tmp_path):
  """Write a json document under tmp_path and return its path."""
  def _write(name, data):
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
  return _write

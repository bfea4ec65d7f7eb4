"""
Tests for Manifest File Loading.

Verifies:
1. Missing files warn and contribute nothing.
2. Directory discovery is recursive and sorted.
3. File merging keeps the given priority order.
"""

import pytest
from rich.console import Console

from ktbridge.manifest import decode, find_manifests, merge_files, read_manifest
from ktbridge.utils.console import set_console


@pytest.fixture
def recorder():
  capture = Console(record=True, width=200)
  set_console(capture)
  return capture


def _write(path, kind, qualified_name, **entries):
  lines = [f"[{kind}:{qualified_name}]"] + [f"{k}={v}" for k, v in entries.items()]
  path.parent.mkdir(parents=True, exist_ok=True)
  path.write_text("\n".join(lines) + "\n", encoding="utf-8")
  return path


def test_read_missing_manifest(tmp_path, recorder):
  assert read_manifest(tmp_path / "absent.manifest") == ""
  output = recorder.export_text()
  assert "Manifest not found" in output
  assert "absent.manifest" in output


def test_find_manifests(tmp_path):
  _write(tmp_path / "b" / "two.manifest", "async", "p.two", name="two")
  _write(tmp_path / "a" / "one.manifest", "async", "p.one", name="one")
  (tmp_path / "a" / "notes.txt").write_text("ignored", encoding="utf-8")

  found = find_manifests(tmp_path)
  assert [p.name for p in found] == ["one.manifest", "two.manifest"]
  assert find_manifests(found[0]) == [found[0]]
  assert find_manifests(tmp_path / "missing") == []


def test_merge_files_with_missing_entry(tmp_path, recorder):
  first = _write(tmp_path / "first.manifest", "async", "p.run", name="run", **{"return": "String"})
  second = _write(tmp_path / "second.manifest", "async", "p.run", name="run", **{"return": "Int"})

  merged = merge_files([tmp_path / "gone.manifest", first, second])
  (run,) = decode(merged)

  assert run.return_type == "String"
  assert "gone.manifest" in recorder.export_text()

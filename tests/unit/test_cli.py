"""
Migration Command Unit Tests

``mail-notes-migrate`` against SQLite databases.
"""

from mail_notes.cli import main
from mail_notes.services.schema import MIGRATIONS


def test_migrate_then_noop(tmp_path, capsys):
    url = f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"

    assert main(["--database-url", url]) == 0
    assert f"Applied {len(MIGRATIONS)} schema step(s)" in capsys.readouterr().out

    assert main(["--database-url", url]) == 0
    assert "Applied 0 schema step(s)" in capsys.readouterr().out


def test_migrate_failure_exits_nonzero(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'notes.db'}"

    assert main(["--database-url", url]) == 1

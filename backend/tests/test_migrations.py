from pathlib import Path

from alembic.config import Config
from alembic.script import ScriptDirectory

REPO_ROOT = Path(__file__).resolve().parents[2]


def _scripts():
    config = Config(str(REPO_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(REPO_ROOT / "database" / "migrations"))
    return ScriptDirectory.from_config(config)


def test_migrations_form_a_single_chain():
    scripts = _scripts()

    assert scripts.get_heads() == ["20261018_0002"]
    revisions = [script.revision for script in scripts.walk_revisions()]
    assert revisions == ["20261018_0002", "20261018_0001"]


def test_environment_describes_this_schema():
    env_source = (REPO_ROOT / "database" / "migrations" / "env.py").read_text()

    assert env_source.startswith('"""Alembic environment for the campus timetable schema.')
    assert "render_as_batch" in env_source

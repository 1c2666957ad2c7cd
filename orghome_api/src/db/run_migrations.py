"""
Programmatic Alembic migration runner.

Runs migrations without an alembic.ini by pointing Alembic at this package's
migrations directory.

Usage examples:
    python -m src.db.run_migrations upgrade head
    python -m src.db.run_migrations downgrade -1
    python -m src.db.run_migrations current
"""

import sys
from pathlib import Path
from typing import Callable, Dict, List

from alembic import command
from alembic.config import Config

from src.db.config import get_settings

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# command name -> (alembic function, default arguments)
_COMMANDS: Dict[str, tuple[Callable, List[str]]] = {
    "upgrade": (command.upgrade, ["head"]),
    "downgrade": (command.downgrade, ["-1"]),
    "history": (command.history, []),
    "current": (command.current, []),
    "heads": (command.heads, []),
    "stamp": (command.stamp, ["head"]),
}


# PUBLIC_INTERFACE
def build_config() -> Config:
    """Alembic Config with script location and the sync DB URL for offline use."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", get_settings().sync_database_url)
    return cfg


# PUBLIC_INTERFACE
def main(argv: List[str] | None = None) -> None:
    """Run an Alembic command with programmatic configuration."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("No Alembic arguments provided. Example: upgrade head")
        sys.exit(1)

    name, rest = args[0], args[1:]
    if name not in _COMMANDS:
        print(f"Unsupported Alembic command: {name}")
        sys.exit(2)

    func, defaults = _COMMANDS[name]
    func(build_config(), *(rest or defaults))


if __name__ == "__main__":
    main()

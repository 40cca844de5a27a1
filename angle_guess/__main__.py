from __future__ import annotations

import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Ensure the repository root (parent of this package) is on ``sys.path``.

    Lets ``python angle_guess/__main__.py`` work as well as ``python -m angle_guess``.
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root_str = str(pkg_dir.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # Works when executed as a module: python -m angle_guess
    from .app import run
    from .config import GameConfig, configure_logging
except ImportError:
    # Works when executed as a script
    _ensure_repo_root_on_path()
    from angle_guess.app import run
    from angle_guess.config import GameConfig, configure_logging


def main() -> int:
    """Entry point for running the game from the command line."""
    config = GameConfig.from_env()
    configure_logging(config.log_level)
    return run(config=config)


if __name__ == "__main__":
    raise SystemExit(main())

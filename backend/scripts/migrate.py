"""Run Alembic migrations against the configured database."""
import logging
import os
import sys

from alembic import command
from alembic.config import Config

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from gymsmash.config import get_settings  # noqa: E402

logger = logging.getLogger(__name__)


def upgrade(url: str, revision: str = "head") -> None:
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)
    command.upgrade(cfg, revision)


def main() -> None:
    settings = get_settings()
    revision = sys.argv[1] if len(sys.argv) > 1 else "head"
    logger.info(f"Upgrading database to {revision}")
    upgrade(settings.database_url, revision)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()

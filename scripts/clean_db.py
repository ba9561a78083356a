import logging

from app.db.postgres.base import drop_tables, engine

logger = logging.getLogger(__name__)


def clean(bind) -> None:
    # drop_all orders drops so post_categories goes before its parents
    drop_tables(bind=bind)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        clean(engine)
        logger.info("Database cleaned. Restart the API to recreate tables.")
    except Exception as e:
        logger.error(f"Cleaning failed: {e}", exc_info=True)
        raise SystemExit(1)

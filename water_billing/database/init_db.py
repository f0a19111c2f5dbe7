# water_billing/database/init_db.py

from water_billing.database.db_utils import get_engine
from water_billing.database.models import Base
from water_billing.utils.logger import get_logger

logger = get_logger(__name__)


def init_db(engine=None):
    """
    Creates all tables defined in models.py inside the database.
    """
    logger.info("🔄 Connecting to database...")
    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    logger.info("✅ Tables created successfully!")
    return engine


if __name__ == "__main__":
    init_db()


#python -m water_billing.database.init_db

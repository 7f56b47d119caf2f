from app.core.config import settings
from app.core.logs import setup_logging
from app.db.session import engine, Session, init_db

from app.db.seed import seed_all


def run_seed():
    setup_logging()
    init_db()
    with Session(engine) as session:
        seed_all(session=session, seed_path=settings.SEED_PATH)


if __name__ == "__main__":
    run_seed()

# app/main.py
import uvicorn

from app.api import create_app
from app.data.database import Base, engine
from app.data import models  # noqa: F401  rejestruje tabele w Base.metadata
from app.utils.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready", tables=sorted(Base.metadata.tables.keys()))
except Exception as e:
    logger.error("Failed to create tables", error=str(e))
    raise


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

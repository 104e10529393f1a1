from app.config import HOST, PORT
from app.logger_config import logger
from app.main import app  # noqa: F401



if __name__ == "__main__":
    import uvicorn
    logger.info("Starting App.....")
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)

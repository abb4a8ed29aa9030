import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()


def _env_flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = int(os.getenv("DB_PORT", "3306"))
    DB_USERNAME = os.getenv("DB_USERNAME", "root")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")
    DB_NAME = os.getenv("DB_NAME", "taskmanager_db")
    # utf8mb4 so task text can hold any Unicode character (emoji included)
    DB_CHARSET = os.getenv("DB_CHARSET", "utf8mb4")

    # DATABASE_URL wins when set (e.g. sqlite:///taskmaster.db for local runs)
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or URL.create(
        "mysql+pymysql",
        username=DB_USERNAME,
        password=DB_PASSWORD or None,
        host=DB_HOST,
        port=DB_PORT,
        database=DB_NAME,
        query={"charset": DB_CHARSET},
    ).render_as_string(hide_password=False)
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Gates the deleteAllUserTasks action
    ENABLE_DELETE_ALL = _env_flag("ENABLE_DELETE_ALL")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

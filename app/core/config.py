import os
from dotenv import load_dotenv
load_dotenv()

class Settings:
    APP_NAME = os.getenv("APP_NAME", "jantri-api")
    APP_ENV = os.getenv("APP_ENV", "dev")
    APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8000"))
    TZ = os.getenv("TZ", "Asia/Kolkata")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

    MYSQL_DSN = (
        f"mysql+aiomysql://{os.getenv('MYSQL_USER','root')}:{os.getenv('MYSQL_PASSWORD','123456')}"
        f"@{os.getenv('MYSQL_HOST','127.0.0.1')}:{os.getenv('MYSQL_PORT','3306')}/{os.getenv('MYSQL_DB','jantri')}?charset=utf8mb4"
    )
    # full URL wins over the MySQL parts (tests point this at sqlite)
    DATABASE_URL = os.getenv("DATABASE_URL") or MYSQL_DSN

    JWT_SECRET = os.getenv("JWT_SECRET", "change_me")
    JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "43200"))

    # paise
    RISK_THRESHOLD_HIGH = int(os.getenv("RISK_THRESHOLD_HIGH", "1000"))
    RISK_THRESHOLD_MEDIUM = int(os.getenv("RISK_THRESHOLD_MEDIUM", "500"))
    RISK_THRESHOLD_LOW = int(os.getenv("RISK_THRESHOLD_LOW", "100"))
    HIGH_RISK_BET_AMOUNT = int(os.getenv("HIGH_RISK_BET_AMOUNT", "1000"))

settings = Settings()

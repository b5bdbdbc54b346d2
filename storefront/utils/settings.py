# storefront/utils/settings.py
import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

#darmowa wysylka od progu, ponizej stala stawka
FREE_SHIPPING_THRESHOLD = Decimal(os.getenv("FREE_SHIPPING_THRESHOLD", "100"))
FLAT_SHIPPING_RATE = Decimal(os.getenv("FLAT_SHIPPING_RATE", "5.99"))

DEFAULT_PER_PAGE = int(os.getenv("DEFAULT_PER_PAGE", 12))
MAX_PER_PAGE = int(os.getenv("MAX_PER_PAGE", 96))

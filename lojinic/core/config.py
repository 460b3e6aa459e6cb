import os
from dotenv import load_dotenv

load_dotenv(override=True)

BOT_TOKEN = os.getenv("BOT_TOKEN")
BOT_USERNAME = os.getenv("BOT_USERNAME", "lojinic_bot")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./lojinic.db")


REDIS_DSN = os.getenv("REDIS_DSN", "redis://localhost:6379/0")
CATALOG_CACHE_TTL = int(os.getenv("CATALOG_CACHE_TTL", "300"))


ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@lojinic.com").strip().lower()
DEFAULT_PIX_KEY = os.getenv("DEFAULT_PIX_KEY", "000.000.000-00 (PIX)")
DEFAULT_STORE_COLOR = os.getenv("DEFAULT_STORE_COLOR", "#2563eb")
DEFAULT_PRODUCT_IMAGE = os.getenv(
    "DEFAULT_PRODUCT_IMAGE", "https://source.unsplash.com/random/300x300/?product"
)

import os
from pathlib import Path
from dotenv import load_dotenv

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set. Check your .env file.")

STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173").rstrip("/")
ORDERS_API_PREFIX = os.getenv("ORDERS_API_PREFIX", "/api/orders")

SERVICE_NAME = os.getenv("SERVICE_NAME", "order-service")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CHECKOUT_CURRENCY = "usd"
SUCCESS_URL = f"{FRONTEND_URL}/success?session_id={{CHECKOUT_SESSION_ID}}"
CANCEL_URL = f"{FRONTEND_URL}/cancel"

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

import os
from dotenv import load_dotenv

load_dotenv()

API_NAME = os.getenv("API_NAME", "Budget Forecast API")

# Database
DB_FILE = os.getenv("BUDGET_DB_FILE", "budget.duckdb")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("BUDGET_LOG_FILE") or None

APP_ENV = os.getenv("APP_ENV", "development")

# Forecast runs through December of this year
FORECAST_HORIZON_YEAR = int(os.getenv("FORECAST_HORIZON_YEAR", "2027"))

# Upper bound for the concurrent store reads behind one forecast/summary
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("API_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]


def is_production() -> bool:
    return APP_ENV.lower() == "production"

"""Configuration: .env loading, paths, constants."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Project root = parent of itinerary_costs/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# --- Inputs ---
TRIP_PATH = os.getenv("ITINERARY_TRIP_PATH", str(PROJECT_ROOT / "trip.json"))
SERVICE_PRICES_PATH = os.getenv("ITINERARY_SERVICE_PRICES_PATH", str(PROJECT_ROOT / "service_prices.json"))
HOTELS_PATH = os.getenv("ITINERARY_HOTELS_PATH", str(PROJECT_ROOT / "hotel_definitions.json"))

# --- Outputs ---
OUTPUT_DIR = Path(os.getenv("ITINERARY_OUTPUT_DIR", str(PROJECT_ROOT / "output")))
LOG_LEVEL = os.getenv("ITINERARY_LOG_LEVEL", "WARNING")

# --- Trip defaults ---
DEFAULT_CURRENCY = os.getenv("ITINERARY_DEFAULT_CURRENCY", "THB")

# --- Aggregation ---
ROUNDING_PLACES = 2  # applied once, after all items are summed
UNASSIGNED_TRAVELER_ID = "unassigned"  # per-person bucket for costs nobody participates in

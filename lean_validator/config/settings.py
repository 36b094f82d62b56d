"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Default error messages ---
DEFAULT_MESSAGE: str = os.getenv("LEAN_VALIDATOR_DEFAULT_MESSAGE", "Please check the input value.")
REQUIRED_MESSAGE: str = os.getenv("LEAN_VALIDATOR_REQUIRED_MESSAGE", "This field is required.")
NOT_AN_OBJECT_MESSAGE: str = os.getenv("LEAN_VALIDATOR_NOT_AN_OBJECT_MESSAGE", "Value is not an object.")
ARRAY_COUNT_MESSAGE: str = os.getenv("LEAN_VALIDATOR_ARRAY_COUNT_MESSAGE", "Please select the values.")

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# --- Metrics ---
METRICS_ENABLED: bool = os.getenv("LEAN_VALIDATOR_METRICS_ENABLED", "true").lower() == "true"

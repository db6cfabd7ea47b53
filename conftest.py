# type: ignore
"""Run every test against the in-memory store; settings are read once at import."""
import os

os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("STRICT_UPDATES", "false")

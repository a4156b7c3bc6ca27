"""Application configuration via environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

# Plan engine rules (JSON overrides for services.plan_engine.EngineConfig)
PLAN_RULES_PATH = os.getenv("PLAN_RULES_PATH", "")
PLAN_MAX_VARIATIONS = int(os.getenv("PLAN_MAX_VARIATIONS", "8"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")

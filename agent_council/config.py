"""Configuration for the Agent Council."""

import os

from dotenv import load_dotenv

load_dotenv()

# HTTP surface
HOST = os.getenv("AGENT_COUNCIL_HOST", "0.0.0.0")
PORT = int(os.getenv("AGENT_COUNCIL_PORT", "8001"))

# Allowed browser origins for local development
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "AGENT_COUNCIL_CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000",
    ).split(",")
    if origin.strip()
]

# Width of the "====" rule under report headings
REPORT_RULE_WIDTH = 40

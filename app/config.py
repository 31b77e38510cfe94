# app/config.py
import os

# Remote creature API (PokeAPI v2)
POKEAPI_BASE_URL = os.getenv("POKEAPI_BASE_URL", "https://pokeapi.co/api/v2").rstrip("/")

# Page size used when walking the remote index
POKEAPI_INDEX_LIMIT = int(os.getenv("POKEAPI_INDEX_LIMIT", "10000"))

# Seconds before a single HTTP request gives up
POKEAPI_TIMEOUT = float(os.getenv("POKEAPI_TIMEOUT", "10"))

# Upper bound on detail requests in flight during the initial load
POKEAPI_MAX_CONCURRENCY = int(os.getenv("POKEAPI_MAX_CONCURRENCY", "32"))

CATALOG_LOG_LEVEL = os.getenv("CATALOG_LOG_LEVEL", "INFO").upper()

# Number of entries shown per catalogue page. Not configurable.
PAGE_SIZE = 18

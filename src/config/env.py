# src/config/env.py
import os

# Environment constants to avoid typos in comparisons
ENV_DEV = "dev"
ENV_PROD = "prod"

# "dev" keeps fetched history around longer while iterating locally
APP_ENV = os.getenv("APP_ENV", ENV_PROD).lower()

import os

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/foodhub_db")

# Application Metadata
PROJECT_NAME = "FoodHub Orders"
VERSION = "1.0.0"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Live subscriptions: undelivered events kept per subscriber before new ones are dropped
SUBSCRIPTION_BUFFER = int(os.getenv("SUBSCRIPTION_BUFFER", 100))

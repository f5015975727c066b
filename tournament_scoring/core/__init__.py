"""Configuration, logging and Celery setup."""

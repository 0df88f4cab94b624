"""Configuration, logging and database access shared by the application."""

"""Version 1 of the API, mounted under ``/v1``."""

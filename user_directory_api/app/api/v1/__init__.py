"""Version 1 of the user directory API."""

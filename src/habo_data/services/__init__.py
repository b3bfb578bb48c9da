"""Services module for habo-data - configuration and backend access."""

"""Version 1 of the Product Reviews API."""

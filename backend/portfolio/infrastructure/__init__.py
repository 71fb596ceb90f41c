"""Infrastructure — database sessions, logging setup, and the media host client."""

"""Domain services backed by the livescore database."""

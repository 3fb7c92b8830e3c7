"""Location tracking and address resolution."""

"""PlaceMate services."""

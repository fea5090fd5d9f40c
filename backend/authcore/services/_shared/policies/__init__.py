"""Input policies shared by services."""

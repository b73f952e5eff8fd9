"""Infrastructure layer — network access for remote style documents."""

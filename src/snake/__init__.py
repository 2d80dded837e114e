"""Snake arcade game: grid simulation, session flow and high-score storage."""

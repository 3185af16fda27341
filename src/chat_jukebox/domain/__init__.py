"""Domain layer - business logic for rooms, playback and song lookup."""

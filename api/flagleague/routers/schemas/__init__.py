"""Request and response models for the league API."""

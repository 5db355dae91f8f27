"""Service layer for speech text preparation."""

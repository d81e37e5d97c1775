"""Rule-based Hanabi player: hint-derived hand knowledge and an ordered rule cascade."""

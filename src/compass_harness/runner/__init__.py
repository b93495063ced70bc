"""Application lifecycle and step logging."""

"""Chain context, command registry, errors and session."""

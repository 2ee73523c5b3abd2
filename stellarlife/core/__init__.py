"""Core engine components: configuration, state, integration and timing."""

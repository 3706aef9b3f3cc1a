"""Call sites of the conversation driver: planning and review."""

"""Search result price comparison."""

"""Call sessions and call event dispatch."""

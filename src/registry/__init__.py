"""Remote catalog API clients."""

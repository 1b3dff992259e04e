"""Infrastructure adapters: result cache and HTTP clients."""

"""HTTP and WebSocket front end for Neon Snake."""

"""HTTP driver: one request per tick, no server-side pacing."""

"""AyurWell wellness backend."""

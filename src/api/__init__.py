"""HTTP surface of the console backend."""

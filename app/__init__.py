"""BookNex notification and booking backend."""

"""Travel admin API: content management backend for the travel site."""

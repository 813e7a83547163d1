"""Resource routers mounted under the API prefix."""

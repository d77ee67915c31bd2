"""Kerala Horizon tourism companion API."""

"""Services used by the price comparison API."""

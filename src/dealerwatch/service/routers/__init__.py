"""API routers for the DealerWatch service."""

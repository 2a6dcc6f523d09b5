"""HTTP service for the dynamic fuel system."""

"""Resource gateway routers."""

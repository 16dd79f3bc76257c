"""Flask host for live Singlish typing (see frontend.web)."""

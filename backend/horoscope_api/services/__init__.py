"""Services Layer — orchestrates key resolution and store calls per request."""

"""REST API for videoscripter."""

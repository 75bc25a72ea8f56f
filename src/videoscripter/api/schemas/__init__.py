"""Request and response schemas for the videoscripter API."""

"""Test data factories for videoscripter."""

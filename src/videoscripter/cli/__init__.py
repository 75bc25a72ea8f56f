"""
Command-line interface for videoscripter.
"""

"""Splitrip backend package."""

"""Booking services package."""

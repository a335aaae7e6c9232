"""Hizb Tracker - read the 60 hizb divisions and keep track of what is done."""

__version__ = "0.1.0"

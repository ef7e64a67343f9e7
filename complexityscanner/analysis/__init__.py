"""Complexity analysis over parsed syntax trees."""

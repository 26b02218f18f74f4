"""Sprout — habit and gratitude tracker with optional AI coaching notes."""

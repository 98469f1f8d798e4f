"""Stylesheets and board colour themes."""

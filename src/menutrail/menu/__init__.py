"""Menus — link definitions, the link index, and active trail resolvers."""

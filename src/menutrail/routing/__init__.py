"""Routing — route definitions and the matches built from them.

A match carries the route name, the raw and converted parameter mappings,
and the path variables the route declares: everything the active trail
lookup needs to find the menu link for the current page. Dispatching
requests to routes is left to the host framework.
"""

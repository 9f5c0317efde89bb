"""Generation — URLs and URI templates from named routes.

Both generators share one pipeline: resolve the route, classify the
parameter object against its segments, then render.
"""

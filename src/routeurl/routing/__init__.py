"""Routing — named route table consulted by the generators.

Routes are registered during setup and frozen before the first
generation call.
"""

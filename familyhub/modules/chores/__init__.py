"""
Chores module: catalog, assignments, completion and verification.
"""

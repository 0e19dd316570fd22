"""
Signed-in users and bearer token authentication.
"""

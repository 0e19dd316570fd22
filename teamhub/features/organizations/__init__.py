"""
Organizations and org roles; the request's organization context.
"""

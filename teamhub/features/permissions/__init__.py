"""
Resource-permission store.

Maps permission labels to action sets and records which actions each user
holds on each resource scope within an organization.
"""

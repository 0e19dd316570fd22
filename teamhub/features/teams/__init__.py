"""
Team membership feature.

Lists, adds, updates and removes team members. Membership grants are written
through the team resource-permission service; who may change them is decided
by the authorization gate selected for the deployment.
"""

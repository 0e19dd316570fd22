"""
Presentation-only helpers for member listings: avatars, hidden users and
auth provider labels.
"""
import hashlib

from teamhub.features.teams.settings import TeamSettings
from teamhub.features.users.models import User


AUTH_PROVIDER_LABELS = {
    "oauth_github": "GitHub",
    "oauth_google": "Google",
    "oauth_azuread": "AzureAD",
    "oauth_gitlab": "GitLab",
    "oauth_grafana_com": "grafana.com",
    "oauth_grafananet": "grafana.com",
    "auth.saml": "SAML",
    "ldap": "LDAP",
    "": "LDAP",
    "jwt": "JWT",
}


def get_gravatar_url(email: str, settings: TeamSettings) -> str:
    if settings.disable_gravatar:
        return f"{settings.app_sub_url}/public/img/user_profile.png"
    if email == "":
        return ""
    digest = hashlib.md5(email.lower().encode("utf-8")).hexdigest()
    return f"{settings.app_sub_url}/avatar/{digest}"


def is_hidden_user(login: str, caller: User, settings: TeamSettings) -> bool:
    """Hidden logins stay visible to themselves and to server admins."""
    if login == "" or caller.is_admin or login == caller.login:
        return False
    return login in settings.hidden_users


def get_auth_provider_label(auth_module: str | None) -> str:
    return AUTH_PROVIDER_LABELS.get(auth_module or "", "OAuth")

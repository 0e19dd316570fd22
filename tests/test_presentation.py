import hashlib

import pytest

from teamhub.features.teams.presentation import get_auth_provider_label, get_gravatar_url, is_hidden_user
from teamhub.features.teams.settings import TeamSettings
from teamhub.features.users.models import User


def test_gravatar_url_hashes_lowercased_email():
    digest = hashlib.md5(b"jane@example.com").hexdigest()
    settings = TeamSettings(app_sub_url="/grafana")

    assert get_gravatar_url("Jane@Example.com", settings) == f"/grafana/avatar/{digest}"


def test_gravatar_url_empty_email():
    assert get_gravatar_url("", TeamSettings()) == ""


def test_gravatar_disabled():
    settings = TeamSettings(disable_gravatar=True)
    assert get_gravatar_url("jane@example.com", settings) == "/public/img/user_profile.png"


class TestIsHiddenUser:
    settings = TeamSettings(hidden_users=frozenset({"ghost"}))

    def test_hidden_for_other_users(self):
        assert is_hidden_user("ghost", User(login="jane", is_admin=False), self.settings)

    def test_visible_to_self(self):
        assert not is_hidden_user("ghost", User(login="ghost", is_admin=False), self.settings)

    def test_visible_to_server_admin(self):
        assert not is_hidden_user("ghost", User(login="root", is_admin=True), self.settings)

    def test_not_configured(self):
        assert not is_hidden_user("jane", User(login="bob", is_admin=False), self.settings)

    def test_empty_login(self):
        assert not is_hidden_user("", User(login="bob", is_admin=False), self.settings)


@pytest.mark.parametrize("auth_module, label", [
    ("oauth_github", "GitHub"),
    ("oauth_google", "Google"),
    ("oauth_azuread", "AzureAD"),
    ("oauth_gitlab", "GitLab"),
    ("oauth_grafana_com", "grafana.com"),
    ("oauth_grafananet", "grafana.com"),
    ("auth.saml", "SAML"),
    ("ldap", "LDAP"),
    ("", "LDAP"),
    (None, "LDAP"),
    ("jwt", "JWT"),
    ("oauth_okta", "OAuth"),
])
def test_auth_provider_label(auth_module, label):
    assert get_auth_provider_label(auth_module) == label

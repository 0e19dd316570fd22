"""
Deployment settings the team feature depends on.

Built once from teamhub.core.config and handed to the gate and the reader
explicitly, so tests can swap them through dependency overrides.
"""
import enum
from dataclasses import dataclass, field

from teamhub.core import config


TEAM_GROUP_SYNC_FEATURE = "teamgroupsync"


class AccessControlMode(str, enum.Enum):
    # Team guardian checks inside the handlers
    LEGACY = "legacy"
    # Action/scope checks on the route, handlers do not re-check
    FINE_GRAINED = "fine_grained"


@dataclass(frozen=True)
class TeamSettings:
    access_control_mode: AccessControlMode = AccessControlMode.LEGACY
    licensed_features: frozenset[str] = field(default_factory=frozenset)
    hidden_users: frozenset[str] = field(default_factory=frozenset)
    app_sub_url: str = ""
    disable_gravatar: bool = False

    @property
    def legacy_access_control(self) -> bool:
        return self.access_control_mode == AccessControlMode.LEGACY

    def feature_enabled(self, feature: str) -> bool:
        return feature in self.licensed_features


def get_team_settings() -> TeamSettings:
    """FastAPI dependency returning settings from the environment."""
    return TeamSettings(
        access_control_mode=(
            AccessControlMode.FINE_GRAINED if config.ACCESS_CONTROL_ENABLED else AccessControlMode.LEGACY
        ),
        licensed_features=config.LICENSED_FEATURES,
        hidden_users=config.HIDDEN_USERS,
        app_sub_url=config.APP_SUB_URL,
        disable_gravatar=config.DISABLE_GRAVATAR,
    )

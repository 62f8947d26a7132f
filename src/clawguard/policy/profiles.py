"""
Profile Presets for Tool Policy.

Named presets that enable or disable whole tool groups.
Explicit allow/block lists in SecurityConfig are applied on top.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .groups import ToolGroup


@dataclass(frozen=True)
class ProfileDef:
    """
    Definition of a tool access profile.

    Attributes:
        groups: Group -> enabled flag. Groups absent from the mapping are
            not restricted by the profile.
    """

    groups: Mapping[ToolGroup, bool] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def is_group_enabled(self, group: ToolGroup) -> bool:
        """
        Check whether the profile enables a group.

        Args:
            group: Group to check.

        Returns:
            True unless the profile explicitly disables the group.
        """
        return self.groups.get(group, True)


def _profile(**flags: bool) -> ProfileDef:
    return ProfileDef(
        groups=MappingProxyType(
            {ToolGroup(name): enabled for name, enabled in flags.items()}
        )
    )


DEFAULT_PROFILE = "coding"

PROFILES: Mapping[str, ProfileDef] = MappingProxyType({
    "minimal": _profile(
        runtime=False,
        filesystem=False,
        web=False,
        messaging=False,
        system=True,
        development=False,
        custom=False,
    ),
    "coding": _profile(
        runtime=True,
        filesystem=True,
        web=True,
        messaging=False,
        system=True,
        development=True,
        custom=True,
    ),
    "messaging": _profile(
        runtime=False,
        filesystem=False,
        web=True,
        messaging=True,
        system=True,
        development=False,
        custom=True,
    ),
    "full": _profile(
        runtime=True,
        filesystem=True,
        web=True,
        messaging=True,
        system=True,
        development=True,
        custom=True,
    ),
    # No group defaults: only the explicit allow/block lists apply.
    "custom": ProfileDef(),
})


def get_profile(name: str | None) -> ProfileDef:
    """
    Look up a profile by name.

    Args:
        name: Profile name; None or unknown names resolve to the default.

    Returns:
        The matching profile, or the "coding" profile.
    """
    if name and name in PROFILES:
        return PROFILES[name]
    return PROFILES[DEFAULT_PROFILE]

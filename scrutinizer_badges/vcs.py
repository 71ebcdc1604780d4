"""
VCS codes used by the Scrutinizer repository API.

Scrutinizer identifies the hosting platform of a repository by a short code in
the API path, e.g. ``/api/repositories/g/filp/whoops`` for GitHub.
"""

from enum import Enum

__all__ = [
    "VCSCode",
    "HOSTED_VCS",
    "get_vcs_code",
    "list_supported_platforms",
]


class VCSCode(str, Enum):
    """Platform codes understood by Scrutinizer."""

    GITHUB = "g"
    BITBUCKET = "b"
    GITLAB = "gl"
    PLAIN_GIT = "gp"


# Codes accepted by the hosted (user/repo) routes
HOSTED_VCS = (VCSCode.GITHUB, VCSCode.BITBUCKET)

_PLATFORMS: dict[str, VCSCode] = {
    "github": VCSCode.GITHUB,
    "bitbucket": VCSCode.BITBUCKET,
    "gitlab": VCSCode.GITLAB,
    "plain-git": VCSCode.PLAIN_GIT,
}


def get_vcs_code(platform: str) -> VCSCode:
    """
    Look up the VCS code for a platform name.

    Args:
        platform: Platform name ('github', 'bitbucket', 'gitlab', 'plain-git')

    Returns:
        The matching VCSCode

    Raises:
        ValueError: If platform is not supported

    Example:
        >>> get_vcs_code("github").value
        'g'
    """
    platform_lower = platform.lower()

    if platform_lower not in _PLATFORMS:
        supported = ", ".join(list_supported_platforms())
        raise ValueError(
            f"Unsupported VCS platform: {platform}. Supported platforms: {supported}"
        )

    return _PLATFORMS[platform_lower]


def list_supported_platforms() -> list[str]:
    """
    List all supported VCS platforms.

    Returns:
        Sorted list of platform identifiers
    """
    return sorted(_PLATFORMS.keys())
